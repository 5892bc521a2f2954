from collections import namedtuple
import numpy as onp

from materialdriver import Increments


UNIAXIAL = 'uniaxial'
BIAXIAL = 'biaxial'
STRESS_DRIVEN_UNIAXIAL = 'stress driven uniaxial'

LoadStep = namedtuple('LoadStep', ['kind', 'dt', 'values'])
LoadStep.__doc__ = """\
One step of a loading path.

Attributes
----------
kind: str
    One of ``UNIAXIAL``, ``BIAXIAL`` or ``STRESS_DRIVEN_UNIAXIAL``
dt: float
    Time step length
values: tuple of float
    Prescribed increments: ``(dstrain11,)``, ``(dstrain11, dstrain12)`` or
    ``(dstress11,)`` respectively
"""

LoadingHistory = namedtuple('LoadingHistory', ['time', 'strainHistory', 'stressHistory',
                                               'internalVariableHistory', 'iterationHistory'])
LoadingHistory.__doc__ = """\
Committed response of a material point along a loading path.

The first entry of every history is the state before the first step.

Attributes
----------
time: array
    accumulated time
strainHistory: array
    strain tensors
stressHistory: array
    stresses in Voigt form
internalVariableHistory: array
    internal variables of the material model
iterationHistory: array
    corrector iterations used by each step (one fewer entry than the others)
"""


def take_step(materialPoint, step, settings=None):
    """Solve one load step without committing it."""
    if step.kind == UNIAXIAL:
        dstrain11, = step.values
        return Increments.uniaxial_increment(materialPoint, dstrain11, step.dt, settings=settings)
    elif step.kind == BIAXIAL:
        dstrain11, dstrain12 = step.values
        return Increments.biaxial_increment(materialPoint, dstrain11, dstrain12, step.dt, settings=settings)
    elif step.kind == STRESS_DRIVEN_UNIAXIAL:
        dstress11, = step.values
        return Increments.stress_driven_uniaxial_increment(materialPoint, dstress11, step.dt, settings=settings)
    else:
        raise ValueError('Unknown load step kind "%s"' % step.kind)


def run(materialPoint, steps, settings=None):
    """Drive a material point along a sequence of ``LoadStep``.

    Each step is solved and then committed before the next one starts, so
    every step sees the state committed by the step before it.

    Returns
    -------
    LoadingHistory
    """
    if settings is None:
        settings = Increments.get_settings()

    timeHistory = [materialPoint.variables.time]
    strainHistory = [materialPoint.variables.strain]
    stressHistory = [materialPoint.variables.stress]
    internalVariableHistory = [materialPoint.variables.internalVariables]
    iterationHistory = []
    for n, step in enumerate(steps):
        if settings.debug_info:
            print('Load step', n, '(%s)' % step.kind)
        _, info = take_step(materialPoint, step, settings)
        committed = materialPoint.commit()

        timeHistory.append(committed.time)
        strainHistory.append(committed.strain)
        stressHistory.append(committed.stress)
        internalVariableHistory.append(committed.internalVariables)
        iterationHistory.append(info.iterations)

    return LoadingHistory(onp.array(timeHistory), onp.array(strainHistory),
                          onp.array(stressHistory), onp.array(internalVariableHistory),
                          onp.array(iterationHistory, dtype=int))


def make_cyclic_steps(kind, amplitude, dt, stepsPerRamp, numCycles):
    """Build a fully reversed push-pull path.

    Each cycle goes from zero to ``+amplitude``, down to ``-amplitude`` and
    back to zero in equal increments, ``stepsPerRamp`` steps for every
    quarter cycle. ``amplitude`` is a tuple matching the ``values`` of the
    load step kind (a scalar is accepted for the uniaxial kinds).
    """
    amplitude = onp.atleast_1d(onp.asarray(amplitude, dtype=onp.float64))
    increment = tuple(float(a) for a in amplitude/stepsPerRamp)
    reverse = tuple(-a for a in increment)

    directions = [increment]*stepsPerRamp + [reverse]*(2*stepsPerRamp) + [increment]*stepsPerRamp
    return [LoadStep(kind, dt, values) for values in directions*numCycles]
