"""Find strain increments compatible with partially prescribed loading.

The functions in this module emulate the stress states produced by common
test machines. In a push-pull machine with a smooth specimen the stress state
in the measuring volume is uniaxial, so given the axial strain increment we
look for the remaining strain components that leave every other stress
component unchanged.

All of them share the same fixed-point loop, ``find_dstrain``. The part that
differs between loading scenarios is a ``Corrector``, which knows which
components are prescribed and how to update the free ones.

None of these functions commit the material point. On success the predicted
state of the point corresponds to the converged increment and the caller
decides whether to call ``MaterialPoint.commit``.
"""

import abc
from collections import namedtuple
import warnings

import numpy as onp
from scipy import linalg

from materialdriver import TensorMath
from materialdriver.MaterialPoint import DrivingIncrement


Settings = namedtuple('Settings', ['max_iters', 'tol', 'debug_info'])

SolutionInfo = namedtuple('SolutionInfo', ['converged', 'iterations', 'error'])

# used only to build default initial guesses
GUESS_POISSON_RATIO = 0.3
GUESS_ELASTIC_MODULUS = 200.0e3


class ConvergenceError(Exception):
    def __init__(self, error, iterations):
        super().__init__('No convergence in strain increment after %d iterations, error = %g'
                         % (iterations, error))
        self.error = error
        self.iterations = iterations


class SingularTangentError(Exception): pass


def get_settings(max_iters=50, tol=1e-9, debug_info=False):
    """Get numerical settings for the strain increment search.

    Parameters
    ==========
    max_iters : int
        Maximum number of corrector iterations.
    tol : real
        The search stops as soon as the error measure returned by the
        corrector falls below `tol`.
    debug_info : bool
        Print the error measure at every iteration.

    Returns
    =======
    settings : A Settings object, which can be used in `find_dstrain`.
    """
    if int(max_iters) != max_iters or max_iters < 1:
        raise ValueError('max_iters must be a positive integer')
    if not tol > 0:
        raise ValueError('tol must be positive')
    return Settings(int(max_iters), tol, debug_info)


def solve_linear_system(A, b):
    """Solve ``A x = b``, raising ``SingularTangentError`` on a bad ``A``."""
    if not (onp.all(onp.isfinite(A)) and onp.all(onp.isfinite(b))):
        raise SingularTangentError('Tangent or residual has non-finite entries')
    if onp.linalg.cond(A) > 1.0/onp.finfo(onp.float64).eps:
        raise SingularTangentError('Tangent is singular to working precision')
    with warnings.catch_warnings():
        warnings.simplefilter('error', linalg.LinAlgWarning)
        try:
            return linalg.solve(A, b)
        except (linalg.LinAlgError, linalg.LinAlgWarning) as e:
            raise SingularTangentError(str(e)) from e


class Corrector(abc.ABC):
    """Update rule for the strain increment guess."""

    @abc.abstractmethod
    def correct(self, dstrain, dstress, tangent):
        """Update ``dstrain`` in place.

        Parameters
        ----------
        dstrain : (6,) numpy array
            Current strain increment guess in engineering Voigt form.
        dstress : (6,) numpy array
            Predicted stress minus committed stress, Voigt form.
        tangent : (6, 6) numpy array
            Derivative of the Voigt stress with respect to the Voigt strain.

        Returns
        -------
        dstrain : the updated guess (the same array)
        error : nonnegative real error measure
        """


class SubspaceCorrector(Corrector):
    """Newton step on the free strain components only.

    The prescribed components are never corrected, and the stress
    increment is driven to zero on the free ones.
    """
    freeComponents = ()

    def correct(self, dstrain, dstress, tangent):
        free = onp.array(self.freeComponents)
        correction = solve_linear_system(tangent[onp.ix_(free, free)], -dstress[free])
        dstrain[free] += correction
        return dstrain, onp.linalg.norm(correction)


class UniaxialStrainCorrector(SubspaceCorrector):
    """Axial strain (component 11) prescribed, all other stresses held."""
    freeComponents = (1, 2, 3, 4, 5)


class BiaxialStrainCorrector(SubspaceCorrector):
    """Axial (11) and in-plane shear (12) strains prescribed."""
    freeComponents = (1, 2, 3, 4)


class StressDrivenUniaxialCorrector(Corrector):
    """Axial stress increment prescribed, all strain components free."""

    def __init__(self, dstress11):
        self.dstress11 = dstress11

    def correct(self, dstrain, dstress, tangent):
        residual = dstress.copy()
        residual[0] -= self.dstress11
        correction = solve_linear_system(tangent, -residual)
        dstrain += correction
        return dstrain, onp.linalg.norm(correction)


def find_dstrain(materialPoint, dstrain, dt, corrector, settings=None):
    """Find a strain increment for ``materialPoint`` accepted by ``corrector``.

    At each iteration the material is integrated over a step of length
    ``dt`` driven by the current guess (converted to a tensor with the shear
    components halved), and the corrector updates the guess from the stress
    increment ``predicted - committed`` and the tangent. The loop stops as
    soon as the corrector's error measure falls below ``settings.tol``.

    The step is not committed: only ``materialPoint.variablesNew`` changes.

    Parameters
    ----------
    materialPoint : MaterialPoint
    dstrain : (6,) array-like
        Initial guess in engineering Voigt form. It is copied; the caller's
        array is never modified.
    dt : real
        Time step length, must be positive.
    corrector : Corrector
    settings : Settings, optional
        Defaults to ``get_settings()``.

    Returns
    -------
    dstrain : (6,) numpy array
        Converged strain increment.
    info : SolutionInfo

    Raises
    ------
    ConvergenceError
        if ``settings.max_iters`` iterations do not reach the tolerance.
    SingularTangentError
        if the corrector cannot solve its linear system.
    """
    if settings is None:
        settings = get_settings()
    if not dt > 0:
        raise ValueError('Time step must be positive')

    dstrain = onp.array(dstrain, dtype=onp.float64)
    if dstrain.shape != (TensorMath.NUM_VOIGT_COMPONENTS,):
        raise ValueError('Strain increment must have 6 Voigt components')

    stress0 = onp.array(materialPoint.variables.stress)
    error = onp.inf
    for i in range(1, settings.max_iters + 1):
        increment = DrivingIncrement(dt=dt,
                                     strain=TensorMath.voigt_to_tensor(dstrain, offdiagscale=2.0))
        predicted = materialPoint.integrate(increment)
        dstress = onp.array(predicted.stress) - stress0
        dstrain, error = corrector.correct(dstrain, dstress, onp.array(predicted.tangent))
        if settings.debug_info:
            print('    strain increment iteration', i, ' error =', f"{error:12.6e}")
        if error < settings.tol:
            return dstrain, SolutionInfo(converged=True, iterations=i, error=error)

    raise ConvergenceError(error, settings.max_iters)


def uniaxial_initial_guess(dstrain11):
    nu = GUESS_POISSON_RATIO
    return onp.array([dstrain11, -nu*dstrain11, -nu*dstrain11, 0.0, 0.0, 0.0])


def biaxial_initial_guess(dstrain11, dstrain12):
    nu = GUESS_POISSON_RATIO
    return onp.array([dstrain11, -nu*dstrain11, -nu*dstrain11, 0.0, 0.0, dstrain12])


def stress_driven_uniaxial_initial_guess(dstress11):
    return uniaxial_initial_guess(dstress11/GUESS_ELASTIC_MODULUS)


def uniaxial_increment(materialPoint, dstrain11, dt, dstrain=None, settings=None):
    """Solve for a uniaxial stress state with prescribed axial strain increment.

    The committed state and the component 11 of the *strain* increment are
    prescribed. The other components are found such that the predicted
    stress matches the committed one on those components.

    A user supplied guess ``dstrain`` has its component 11 overwritten by
    ``dstrain11``. See ``find_dstrain``.
    """
    if dstrain is None:
        dstrain = uniaxial_initial_guess(dstrain11)
    else:
        dstrain = onp.array(dstrain, dtype=onp.float64)
        dstrain[0] = dstrain11
    return find_dstrain(materialPoint, dstrain, dt, UniaxialStrainCorrector(), settings)


def biaxial_increment(materialPoint, dstrain11, dstrain12, dt, dstrain=None, settings=None):
    """Solve for a state with prescribed axial and 12 shear strain increments.

    ``dstrain12`` is an engineering shear strain. The stress components
    22, 33, 23 and 13 are held at their committed values.
    See ``find_dstrain``.
    """
    if dstrain is None:
        dstrain = biaxial_initial_guess(dstrain11, dstrain12)
    else:
        dstrain = onp.array(dstrain, dtype=onp.float64)
        dstrain[0] = dstrain11
        dstrain[5] = dstrain12
    return find_dstrain(materialPoint, dstrain, dt, BiaxialStrainCorrector(), settings)


def stress_driven_uniaxial_increment(materialPoint, dstress11, dt, dstrain=None, settings=None):
    """Solve for a strain increment producing the axial *stress* increment ``dstress11``.

    All other stress components are held at their committed values. The
    default guess assumes an elastic modulus of ``GUESS_ELASTIC_MODULUS``.
    See ``find_dstrain``.
    """
    if dstrain is None:
        dstrain = stress_driven_uniaxial_initial_guess(dstress11)
    return find_dstrain(materialPoint, dstrain, dt,
                        StressDrivenUniaxialCorrector(dstress11), settings)
