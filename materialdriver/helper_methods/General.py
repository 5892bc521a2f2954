from materialdriver import Increments
from materialdriver import LoadingPath
from materialdriver.MaterialPoint import MaterialPoint
from materialdriver.material import MaterialModelFactory

from typing import List
from typing import Optional


class MaterialBlockError(Exception): pass
class SolverBlockError(Exception): pass
class LoadingBlockError(Exception): pass


_NUM_VALUES = {LoadingPath.UNIAXIAL: 1,
               LoadingPath.BIAXIAL: 2,
               LoadingPath.STRESS_DRIVEN_UNIAXIAL: 1}


def setup_material_point(mat_inputs: dict) -> MaterialPoint:
    print('Setting up material point...')
    try:
        print('    Model type = %s' % mat_inputs['type'])
        properties = mat_inputs['properties']
        for key, val in properties.items():
            print('    %-28s= %s' % (key, val))
        materialModel = MaterialModelFactory.material_model_factory(mat_inputs['type'], properties)
    except (AttributeError, KeyError, TypeError, ValueError,
            MaterialModelFactory.MaterialModelNameError) as e:
        print('\n\n')
        print('Error parsing material model inputs')
        print('Correct syntax is:\n\nmaterial model:\n  type:       <model_name>\n  properties: <dict_of_properties>\n\n')
        raise MaterialBlockError from e
    print('Finished setting up material point.\n')
    return MaterialPoint(materialModel)


def setup_solver_settings(solver_inputs: Optional[dict]) -> Increments.Settings:
    print('Setting up solver settings...')
    if solver_inputs is None:
        solver_inputs = {}
    try:
        settings = Increments.get_settings(max_iters=solver_inputs.get('max iterations', 50),
                                           tol=solver_inputs.get('tolerance', 1e-9),
                                           debug_info=bool(solver_inputs.get('debug info', False)))
    except (AttributeError, TypeError, ValueError) as e:
        print('\n\n')
        print('Error parsing solver inputs')
        print('Correct syntax is:\n\nsolver:\n  max iterations: <int>\n  tolerance:      <float>\n  debug info:     <bool>\n\n')
        raise SolverBlockError from e
    print('    Max iterations = %s' % settings.max_iters)
    print('    Tolerance      = %s' % settings.tol)
    print('    Debug info     = %s' % settings.debug_info)
    print('Finished setting up solver settings.\n')
    return settings


def setup_loading_steps(loading_inputs: dict) -> List[LoadingPath.LoadStep]:
    print('Setting up loading path...')
    try:
        if 'cyclic' in loading_inputs:
            cyclic = loading_inputs['cyclic']
            _check_kind(cyclic['kind'], len(cyclic['amplitude']))
            print('    Cyclic %s path' % cyclic['kind'])
            print('    Amplitude      = %s' % cyclic['amplitude'])
            print('    Cycles         = %s' % cyclic['cycles'])
            steps = LoadingPath.make_cyclic_steps(cyclic['kind'], cyclic['amplitude'], float(cyclic['dt']),
                                                  int(cyclic['steps per ramp']), int(cyclic['cycles']))
        else:
            steps = []
            for block in loading_inputs['steps']:
                values = tuple(float(v) for v in block['values'])
                _check_kind(block['kind'], len(values))
                repeat = int(block.get('repeat', 1))
                print('    %s x %d, values = %s' % (block['kind'], repeat, values))
                steps.extend([LoadingPath.LoadStep(block['kind'], float(block['dt']), values)]*repeat)
    except (AssertionError, KeyError, TypeError, ValueError) as e:
        print('\n\n')
        print('Error parsing loading inputs')
        print('Correct syntax is either:\n\nloading:\n  steps:\n    - kind:   <str>\n      dt:     <float>')
        print('      values: <list<float>>\n      repeat: <int>\n  ...\n')
        print('or:\n\nloading:\n  cyclic:\n    kind:           <str>\n    amplitude:      <list<float>>')
        print('    dt:             <float>\n    steps per ramp: <int>\n    cycles:         <int>\n\n')
        raise LoadingBlockError from e
    print('    Number of steps = %d' % len(steps))
    print('Finished setting up loading path.\n')
    return steps


def _check_kind(kind: str, numValues: int) -> None:
    assert kind in _NUM_VALUES, 'Unknown load step kind "%s"' % kind
    assert numValues == _NUM_VALUES[kind], 'Wrong number of values for "%s"' % kind
