"""Provide differentiable operations on 3x3 tensors and their Voigt forms.

Voigt ordering is ``[11, 22, 33, 23, 13, 12]``: the three normal components
followed by the three shear components.
"""

import jax.numpy as np

# row, column of each Voigt component in the 3x3 tensor
VOIGT_ROWS = (0, 1, 2, 1, 0, 0)
VOIGT_COLS = (0, 1, 2, 2, 2, 1)

NUM_VOIGT_COMPONENTS = 6
NUM_NORMAL_COMPONENTS = 3


def trace(A):
    return A[0, 0] + A[1, 1] + A[2, 2]

def deviator(A):
    dil = trace(A)
    return A - (dil/3)*np.identity(3)

def dev(strain): return deviator(strain)

def sym(A):
    return 0.5*(A + A.T)

def norm_of_deviator_squared(tensor):
    dev = deviator(tensor)
    return np.tensordot(dev,dev)


def tensor_to_voigt(A, offdiagscale=1.0):
    """Flatten a symmetric 3x3 tensor into a Voigt vector.

    Parameters
    ----------
    A : (3,3) array
        Symmetric tensor.
    offdiagscale : real
        Factor multiplying the shear components. Use 2.0 for strains
        (engineering shear) and 1.0 for stresses.

    Returns
    -------
    (6,) array
    """
    v = A[np.array(VOIGT_ROWS), np.array(VOIGT_COLS)]
    return v.at[NUM_NORMAL_COMPONENTS:].multiply(offdiagscale)


def voigt_to_tensor(v, offdiagscale=1.0):
    """Inverse of ``tensor_to_voigt``.

    The shear components are divided by ``offdiagscale`` before being placed
    symmetrically in the tensor, so a strain in engineering Voigt form needs
    ``offdiagscale=2.0``.
    """
    v = np.asarray(v)
    shear = v[NUM_NORMAL_COMPONENTS:]/offdiagscale
    return np.array([[v[0],     shear[2], shear[1]],
                     [shear[2], v[1],     shear[0]],
                     [shear[1], shear[0], v[2]]])
