import unittest

import numpy as onp

from materialdriver import Increments
from materialdriver import LoadingPath
from materialdriver.material import J2Plastic
from materialdriver.test.MaterialPointFixture import MaterialPointFixture


class CyclicStepsFixture(MaterialPointFixture):

    def test_cyclic_path_returns_to_zero(self):
        steps = LoadingPath.make_cyclic_steps(LoadingPath.UNIAXIAL, 1e-3, 0.25, 4, 2)
        self.assertEqual(len(steps), 32)
        self.assertNear(sum(step.values[0] for step in steps), 0.0, 14)
        peak = onp.max(onp.cumsum([step.values[0] for step in steps]))
        self.assertNear(peak, 1e-3, 14)

    def test_biaxial_cyclic_path_carries_both_values(self):
        steps = LoadingPath.make_cyclic_steps(LoadingPath.BIAXIAL, (1e-3, 2e-3), 0.25, 2, 1)
        self.assertEqual(steps[0], LoadingPath.LoadStep(LoadingPath.BIAXIAL, 0.25, (5e-4, 1e-3)))
        self.assertEqual(steps[2], LoadingPath.LoadStep(LoadingPath.BIAXIAL, 0.25, (-5e-4, -1e-3)))


class LinearElasticPathFixture(MaterialPointFixture):

    def test_history_shapes(self):
        point = self.create_linear_elastic_point()
        steps = [LoadingPath.LoadStep(LoadingPath.UNIAXIAL, 0.25, (2.5e-4,))]*3
        history = LoadingPath.run(point, steps)
        self.assertEqual(history.time.shape, (4,))
        self.assertEqual(history.strainHistory.shape, (4, 3, 3))
        self.assertEqual(history.stressHistory.shape, (4, 6))
        self.assertEqual(history.internalVariableHistory.shape, (4, 0))
        self.assertArrayEqual(history.iterationHistory, onp.ones(3, dtype=int))
        self.assertArrayNear(history.time, onp.array([0.0, 0.25, 0.5, 0.75]), 14)
        self.assertArrayNear(history.stressHistory[:,0], onp.array([0.0, 50.0, 100.0, 150.0]), 8)

    def test_unknown_kind_raises(self):
        point = self.create_linear_elastic_point()
        with self.assertRaises(ValueError):
            LoadingPath.run(point, [LoadingPath.LoadStep('triaxial', 1.0, (1e-3,))])


class PlasticPathFixture(MaterialPointFixture):
    def setUp(self):
        self.dt = 0.25
        self.settings = Increments.get_settings(tol=1e-12)

    def test_push_pull_cycle(self):
        point = self.create_j2_point()
        steps = LoadingPath.make_cyclic_steps(LoadingPath.UNIAXIAL, 3e-3, self.dt, 6, 1)
        history = LoadingPath.run(point, steps, self.settings)

        eqps = history.internalVariableHistory[:, J2Plastic.EQPS]
        self.assertTrue(onp.all(onp.diff(eqps) >= 0.0))
        self.assertGreater(eqps[-1], 0.0)
        self.assertTrue(onp.allclose(history.stressHistory[:,1:], 0.0, atol=1e-6))
        # the material yields in both tension and compression
        self.assertGreater(onp.max(history.stressHistory[:,0]), 100.0)
        self.assertLess(onp.min(history.stressHistory[:,0]), -100.0)

    def test_biaxial_path_flows_plastically(self):
        point = self.create_j2_point()
        dstrain = 1e-3*self.dt
        steps = [LoadingPath.LoadStep(LoadingPath.BIAXIAL, self.dt*abs(f), (dstrain*f, dstrain*f))
                 for f in [1.0, 1.0, 1.0, -1.0, -4.0]]
        history = LoadingPath.run(point, steps, self.settings)

        for stress in history.stressHistory[1:]:
            self.assertNotEqual(stress[0], 0.0)
            self.assertNotEqual(stress[5], 0.0)
            self.assertTrue(onp.allclose(stress[1:5], 0.0, atol=1e-6))
        self.assertGreater(history.internalVariableHistory[-1, J2Plastic.EQPS], 0.0)

    def test_stress_driven_path_follows_prescribed_stress(self):
        point = self.create_j2_point(viscosity=1.0e3)
        steps = [LoadingPath.LoadStep(LoadingPath.STRESS_DRIVEN_UNIAXIAL, self.dt, (25.0,))]*8
        history = LoadingPath.run(point, steps, self.settings)

        self.assertTrue(onp.allclose(history.stressHistory[:,0], 25.0*onp.arange(9), atol=1e-5))
        self.assertTrue(onp.allclose(history.stressHistory[:,1:], 0.0, atol=1e-5))
        self.assertGreater(history.strainHistory[-1,0,0], 200.0/200.0e3)


if __name__ == '__main__':
    unittest.main()
