from jaxtyping import Array, Float
import equinox as eqx

from materialdriver.JaxConfig import *
from materialdriver import TensorMath


class CommitError(Exception): pass


class DrivingIncrement(eqx.Module):
    """Input to one integration of the material.

    Attributes:
        dt: Length of the time step.
        strain: Strain increment as a symmetric 3x3 tensor.
    """
    dt: float
    strain: Float[Array, "3 3"]


class CommittedState(eqx.Module):
    """Last accepted state of a material point.

    Attributes:
        time: Accumulated time.
        strain: Accumulated strain tensor.
        stress: Stress in Voigt form.
        internalVariables: Internal variables of the material model.
    """
    time: float
    strain: Float[Array, "3 3"]
    stress: Float[Array, "6"]
    internalVariables: Float[Array, "nv"]


class PredictedState(eqx.Module):
    """Trial outcome of integrating a ``DrivingIncrement``.

    Attributes:
        stress: Trial stress in Voigt form.
        tangent: Derivative of the Voigt stress with respect to the
            engineering Voigt strain, shape ``(6, 6)``.
        internalVariables: Trial internal variables.
        increment: The driving increment that produced this state.
    """
    stress: Float[Array, "6"]
    tangent: Float[Array, "6 6"]
    internalVariables: Float[Array, "nv"]
    increment: DrivingIncrement


def make_response_function(materialModel):
    """Build ``(strain, stateOld, dt) -> (stress, tangent, stateNew)``.

    Stress and tangent are returned in Voigt form. The tangent is taken with
    respect to the engineering (doubled shear) Voigt strain, so it can be used
    directly in a Newton update of a Voigt strain increment.
    """
    compute_stress = grad(materialModel.compute_energy_density, 0)

    def voigt_stress(strainVoigt, stateOld, dt):
        strain = TensorMath.voigt_to_tensor(strainVoigt, offdiagscale=2.0)
        return TensorMath.tensor_to_voigt(compute_stress(strain, stateOld, dt))

    voigt_tangent = jacfwd(voigt_stress, 0)

    def response(strain, stateOld, dt):
        strainVoigt = TensorMath.tensor_to_voigt(strain, offdiagscale=2.0)
        stress = voigt_stress(strainVoigt, stateOld, dt)
        tangent = voigt_tangent(strainVoigt, stateOld, dt)
        stateNew = materialModel.compute_state_new(strain, stateOld, dt)
        return stress, tangent, stateNew

    return response


class MaterialPoint:
    """A single material point with committed and predicted states.

    ``integrate`` never touches the committed state; only ``commit`` does.
    A material point is not safe to share between concurrent solves.
    """

    def __init__(self, materialModel):
        self.materialModel = materialModel
        self._response = jit(make_response_function(materialModel))
        self.reset()

    def reset(self):
        self.variables = CommittedState(time=0.0,
                                        strain=np.zeros((3,3)),
                                        stress=np.zeros(6),
                                        internalVariables=self.materialModel.compute_initial_state())
        self.variablesNew = None

    def integrate(self, increment):
        strain = self.variables.strain + increment.strain
        stress, tangent, stateNew = self._response(strain,
                                                   self.variables.internalVariables,
                                                   increment.dt)
        self.variablesNew = PredictedState(stress=stress,
                                           tangent=tangent,
                                           internalVariables=stateNew,
                                           increment=increment)
        return self.variablesNew

    def commit(self):
        predicted = self.variablesNew
        if predicted is None:
            raise CommitError('Nothing to commit: integrate an increment first')

        self.variables = CommittedState(time=self.variables.time + predicted.increment.dt,
                                        strain=self.variables.strain + predicted.increment.strain,
                                        stress=predicted.stress,
                                        internalVariables=predicted.internalVariables)
        self.variablesNew = None
        return self.variables
