from collections import namedtuple

MaterialModel = namedtuple('MaterialModel',
                           ['compute_energy_density', 'compute_initial_state', 'compute_state_new'])
MaterialModel.__doc__ = """\
Pure functions describing a small-strain material model.

Attributes
----------
compute_energy_density: callable (strain, stateOld, dt) -> real
    Incremental energy density. The stress is its gradient with respect to
    the 3x3 strain tensor.
compute_initial_state: callable () -> array
    Internal variables of the virgin material.
compute_state_new: callable (strain, stateOld, dt) -> array
    Internal variables at the end of a step ending at ``strain``.
"""
