import jax
import jax.numpy as np

from materialdriver.material.MaterialModel import MaterialModel
from materialdriver.material import Hardening
from materialdriver import TensorMath


# props
PROPS_E     = 0
PROPS_NU    = 1
PROPS_MU    = 2
PROPS_KAPPA = 3
PROPS_Y0    = 4
PROPS_HK    = 5

# internal variables
EQPS = 0
PLASTIC_STRAIN = slice(1,1+9)
NUM_STATE_VARS = 10

# tolerance on the yield check, relative to the initial yield strength
_TOLERANCE = 1e-10

# fixed iteration count of the return mapping so that it can be differentiated
# in both forward and reverse mode
_NEWTON_ITERS = 25


def create_material_model_functions(properties):
    """Small-strain von Mises plasticity.

    Isotropic hardening is taken from ``Hardening``. Optional keys are
    ``'kinematic hardening modulus'`` (linear Prager backstress, defaults
    to zero) and ``'viscosity'`` (linear overstress, makes the response
    depend on ``dt``).
    """
    props = make_properties(properties['elastic modulus'],
                            properties['poisson ratio'],
                            properties['yield strength'],
                            properties.get('kinematic hardening modulus', 0.0))

    hardeningModel = Hardening.create_hardening_model(properties)

    def energy_density_function(strain, state, dt):
        return _energy_density(TensorMath.sym(strain), state, dt, props, hardeningModel)

    def compute_state_new_function(strain, state, dt):
        return compute_state_new(TensorMath.sym(strain), state, dt, props, hardeningModel)

    return MaterialModel(energy_density_function,
                         make_initial_state,
                         compute_state_new_function)


def make_properties(E, nu, Y0, Hk):
    mu = 0.5*E/(1.0 + nu)
    kappa = E / 3.0 / (1.0 - 2.0*nu)
    return (E, nu, mu, kappa, Y0, Hk)


def make_initial_state():
    eqps = 0.0
    plasticStrain = np.zeros((3,3))
    return np.hstack((eqps, plasticStrain.ravel()))


def compute_state_new(strain, stateOld, dt, props, hardening_model):
    stateInc = compute_state_increment(strain, stateOld, dt, props, hardening_model)
    return stateOld + stateInc


def _energy_density(strain, state, dt, props, hardening_model):
    stateInc = compute_state_increment(strain, state, dt, props, hardening_model)

    eqpsNew = state[EQPS] + stateInc[EQPS]
    plasticStrainNew = (state[PLASTIC_STRAIN] + stateInc[PLASTIC_STRAIN]).reshape((3,3))

    W = elastic_free_energy(strain - plasticStrainNew, props) + \
        kinematic_free_energy(plasticStrainNew, props) + \
        hardening_model.compute_hardening_energy_density(eqpsNew, state[EQPS], dt)

    return W


def elastic_free_energy(elasticStrain, props):
    Wvol = 0.5*props[PROPS_KAPPA]*np.trace(elasticStrain)**2
    Wdev = props[PROPS_MU] * TensorMath.norm_of_deviator_squared(elasticStrain)
    return Wvol + Wdev


def kinematic_free_energy(plasticStrain, props):
    return props[PROPS_HK]/3.0 * np.tensordot(plasticStrain, plasticStrain)


def compute_backstress(plasticStrain, props):
    return 2.0*props[PROPS_HK]/3.0 * plasticStrain


def compute_relative_stress(strain, state, props):
    """Deviatoric trial stress minus the backstress."""
    plasticStrain = state[PLASTIC_STRAIN].reshape((3,3))
    trialStress = 2.0*props[PROPS_MU]*TensorMath.dev(strain - plasticStrain)
    return trialStress - compute_backstress(plasticStrain, props)


def compute_flow_direction(relativeStress):
    normSquared = np.tensordot(relativeStress, relativeStress)
    isNonzero = normSquared > 1e-16
    normSquared = np.where(isNonzero, normSquared, 1.0)
    dummyN = 0.5*np.array([[0.0, 1.0, 1.0],
                           [1.0, 0.0, 1.0],
                           [1.0, 1.0, 0.0]])
    return np.where(isNonzero,
                    np.sqrt(3./2.)/np.sqrt(normSquared) * relativeStress,
                    dummyN)


def compute_state_increment(strain, state, dt, props, hardening_model):
    eqps = state[EQPS]
    relativeStress = compute_relative_stress(strain, state, props)
    N = compute_flow_direction(relativeStress)
    trialMises = np.tensordot(relativeStress, N)
    flowStress = hardening_model.compute_flow_stress(eqps, eqps, dt)

    isYielding = trialMises - flowStress > _TOLERANCE*props[PROPS_Y0]

    return jax.lax.cond(isYielding,
                        lambda q: update_state(q, N, state, dt, props, hardening_model),
                        lambda q: np.zeros(NUM_STATE_VARS),
                        trialMises)


def update_state(trialMises, N, stateOld, dt, props, hardening_model):
    eqpsOld = stateOld[EQPS]
    stiffness = 3.0*props[PROPS_MU] + props[PROPS_HK]

    def residual(DeltaEqps):
        flowStress = hardening_model.compute_flow_stress(eqpsOld + DeltaEqps, eqpsOld, dt)
        return trialMises - stiffness*DeltaEqps - flowStress

    residual_and_slope = jax.value_and_grad(residual)

    # the residual is convex and decreasing for the supported hardening laws,
    # so newton iterates starting from zero increase monotonically to the root
    def newton_step(i, DeltaEqps):
        r, dr = residual_and_slope(DeltaEqps)
        return DeltaEqps - r/dr

    DeltaEqps = jax.lax.fori_loop(0, _NEWTON_ITERS, newton_step, 0.0*trialMises)
    DeltaPlasticStrain = DeltaEqps*N
    return np.hstack( (DeltaEqps, DeltaPlasticStrain.ravel()) )
