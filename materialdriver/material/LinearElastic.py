import jax.numpy as np

from materialdriver.material.MaterialModel import MaterialModel
from materialdriver import TensorMath

# props
PROPS_E     = 0
PROPS_NU    = 1
PROPS_MU    = 2
PROPS_KAPPA = 3


def create_material_model_functions(properties):
    props = _make_properties(properties['elastic modulus'],
                             properties['poisson ratio'])

    def strain_energy(strain, internalVars, dt):
        del internalVars
        del dt
        return _linear_elastic_energy_density(TensorMath.sym(strain), props)

    return MaterialModel(compute_energy_density = strain_energy,
                         compute_initial_state = make_initial_state,
                         compute_state_new = compute_state_new)


def _make_properties(E, nu):
    mu = 0.5*E/(1.0 + nu)
    kappa = E / 3.0 / (1.0 - 2.0*nu)
    return np.array([E, nu, mu, kappa])


def _linear_elastic_energy_density(strain, props):
    traceStrain = np.trace(strain)
    strainDev = TensorMath.dev(strain)
    kappa = props[PROPS_KAPPA]
    mu = props[PROPS_MU]
    return 0.5*kappa*traceStrain**2 + mu*np.tensordot(strainDev,strainDev)


def make_initial_state():
    return np.array([])


def compute_state_new(strain, internalVars, dt):
    del strain
    del dt
    return internalVars


def voigt_stiffness(E, nu):
    """Elastic stiffness in Voigt form, acting on engineering shear strains."""
    mu = 0.5*E/(1.0 + nu)
    lam = E*nu/((1.0 + nu)*(1.0 - 2.0*nu))
    C = np.zeros((6, 6))
    C = C.at[:3, :3].set(lam)
    C = C + np.diag(np.array([2.0*mu, 2.0*mu, 2.0*mu, mu, mu, mu]))
    return C
