import unittest

import jax.numpy as np
import numpy as onp

from materialdriver import Increments
from materialdriver import TensorMath
from materialdriver.MaterialPoint import CommitError
from materialdriver.MaterialPoint import DrivingIncrement
from materialdriver.material import J2Plastic
from materialdriver.material import LinearElastic
from materialdriver.test.MaterialPointFixture import MaterialPointFixture, E, nu


def make_increment(strainVoigt, dt=1.0):
    return DrivingIncrement(dt=dt, strain=TensorMath.voigt_to_tensor(np.array(strainVoigt), offdiagscale=2.0))


class LinearElasticMaterialPointFixture(MaterialPointFixture):
    def setUp(self):
        self.point = self.create_linear_elastic_point()

    def test_initial_state_is_stress_free(self):
        self.assertEqual(self.point.variables.time, 0.0)
        self.assertArrayEqual(self.point.variables.stress, np.zeros(6))
        self.assertIsNone(self.point.variablesNew)

    def test_tangent_is_elastic_stiffness(self):
        predicted = self.point.integrate(make_increment([1e-4, 0.0, 0.0, 0.0, 0.0, 0.0]))
        self.assertArrayNear(predicted.tangent, LinearElastic.voigt_stiffness(E, nu), 6)

    def test_engineering_shear_strain_gives_tensor_shear_stress(self):
        gamma = 2e-4
        predicted = self.point.integrate(make_increment([0.0, 0.0, 0.0, 0.0, gamma, 0.0]))
        mu = 0.5*E/(1.0 + nu)
        self.assertNear(predicted.stress[4], mu*gamma, 10)
        self.assertArrayNear(np.delete(predicted.stress, 4), np.zeros(5), 10)

    def test_integrate_does_not_change_committed_state(self):
        committed = self.point.variables
        self.point.integrate(make_increment([1e-3, 0.0, 0.0, 0.0, 0.0, 0.0]))
        self.assertIs(self.point.variables, committed)
        self.assertArrayEqual(self.point.variables.strain, np.zeros((3,3)))

    def test_commit_adopts_prediction(self):
        increment = make_increment([1e-3, 0.0, 0.0, 0.0, 0.0, 0.0], dt=0.5)
        predicted = self.point.integrate(increment)
        committed = self.point.commit()
        self.assertEqual(committed.time, 0.5)
        self.assertArrayEqual(committed.strain, increment.strain)
        self.assertArrayEqual(committed.stress, predicted.stress)
        self.assertIsNone(self.point.variablesNew)

    def test_increments_accumulate_on_committed_state(self):
        increment = make_increment([1e-3, 0.0, 0.0, 0.0, 0.0, 0.0])
        first = self.point.integrate(increment)
        self.point.commit()
        second = self.point.integrate(increment)
        self.assertArrayNear(second.stress, 2.0*first.stress, 10)

    def test_last_integration_wins(self):
        self.point.integrate(make_increment([1e-3, 0.0, 0.0, 0.0, 0.0, 0.0]))
        predicted = self.point.integrate(make_increment([-1e-3, 0.0, 0.0, 0.0, 0.0, 0.0]))
        committed = self.point.commit()
        self.assertArrayEqual(committed.stress, predicted.stress)
        self.assertLess(committed.stress[0], 0.0)

    def test_commit_without_prediction_raises(self):
        with self.assertRaises(CommitError):
            self.point.commit()

    def test_double_commit_raises(self):
        Increments.uniaxial_increment(self.point, 1e-3, 1.0)
        self.point.commit()
        with self.assertRaises(CommitError):
            self.point.commit()

    def test_solve_after_commit_uses_new_committed_state(self):
        Increments.uniaxial_increment(self.point, 1e-3, 1.0)
        first = self.point.commit()
        Increments.uniaxial_increment(self.point, 1e-3, 1.0)
        second = self.point.commit()
        self.assertNear(second.stress[0], 2.0*first.stress[0], 8)
        self.assertEqual(second.time, 2.0)

    def test_reset_restores_initial_state(self):
        self.point.integrate(make_increment([1e-3, 0.0, 0.0, 0.0, 0.0, 0.0]))
        self.point.commit()
        self.point.integrate(make_increment([1e-3, 0.0, 0.0, 0.0, 0.0, 0.0]))
        self.point.reset()
        self.assertArrayEqual(self.point.variables.strain, np.zeros((3,3)))
        self.assertIsNone(self.point.variablesNew)
        with self.assertRaises(CommitError):
            self.point.commit()


class PlasticMaterialPointFixture(MaterialPointFixture):
    def setUp(self):
        self.point = self.create_j2_point()

    def test_internal_variables_only_change_on_commit(self):
        predicted = self.point.integrate(make_increment([5e-3, -2.5e-3, -2.5e-3, 0.0, 0.0, 0.0]))
        self.assertGreater(predicted.internalVariables[J2Plastic.EQPS], 0.0)
        self.assertEqual(self.point.variables.internalVariables[J2Plastic.EQPS], 0.0)
        committed = self.point.commit()
        self.assertEqual(committed.internalVariables[J2Plastic.EQPS],
                         predicted.internalVariables[J2Plastic.EQPS])

    def test_plastic_tangent_is_softer_than_elastic(self):
        predicted = self.point.integrate(make_increment([5e-3, -2.5e-3, -2.5e-3, 0.0, 0.0, 0.0]))
        elastic = LinearElastic.voigt_stiffness(E, nu)
        self.assertLess(predicted.tangent[0,0], elastic[0,0])
        # consistent tangent of an associative model is symmetric
        self.assertArrayAllClose(predicted.tangent, predicted.tangent.T, atol=1e-3)

    def test_tangent_matches_finite_differences(self):
        strainVoigt = onp.array([5e-3, -2.5e-3, -2.4e-3, 1e-4, 0.0, 3e-4])
        tangent = self.point.integrate(make_increment(strainVoigt)).tangent
        h = 1e-8
        for j in range(6):
            perturbation = onp.zeros(6)
            perturbation[j] = h
            plus = self.point.integrate(make_increment(strainVoigt + perturbation)).stress
            minus = self.point.integrate(make_increment(strainVoigt - perturbation)).stress
            self.assertArrayAllClose(tangent[:,j], (plus - minus)/(2.0*h), atol=1.0)


if __name__ == '__main__':
    unittest.main()
