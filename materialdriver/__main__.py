import argparse

import numpy as onp

from materialdriver import LoadingPath
from materialdriver.helper_methods.General import setup_loading_steps
from materialdriver.helper_methods.General import setup_material_point
from materialdriver.helper_methods.General import setup_solver_settings

from materialdriver.helper_methods.Parser import dump_input_file
from materialdriver.helper_methods.Parser import parse_yaml_input_file
from materialdriver.helper_methods.Parser import print_banner


class InputFileError(Exception): pass


def print_history(history):
    print('%6s %12s %14s %14s %14s %14s %6s' % ('step', 'time', 'strain 11', 'strain 12',
                                               'stress 11', 'stress 12', 'iters'))
    for n in range(1, len(history.time)):
        print('%6d %12.5e %14.6e %14.6e %14.6e %14.6e %6d' % (n, history.time[n],
                                                            history.strainHistory[n,0,0],
                                                            2.0*history.strainHistory[n,0,1],
                                                            history.stressHistory[n,0],
                                                            history.stressHistory[n,5],
                                                            history.iterationHistory[n-1]))


def main(argv=None):
    print('\nmaterialdriver v0.0.1\n')

    parser = argparse.ArgumentParser(
        prog='materialdriver',
        description='Drive a material point along partially prescribed stress and strain paths')
    parser.add_argument('-i', '--input_file', required=True,
                        help='File name of input file <input_file.yml>')
    parser.add_argument('-o', '--output_file',
                        help='Save the loading history to <output_file.npz>')
    args = parser.parse_args(argv)
    print('Input file = %s\n' % args.input_file)

    dump_input_file(args.input_file)

    print_banner('BEGIN MATERIALDRIVER LOGGING')
    inputs = parse_yaml_input_file(args.input_file)

    for block in ('material model', 'loading'):
        if block not in inputs:
            print('Input file is missing the "%s" block.' % block)
            raise InputFileError(block)

    materialPoint = setup_material_point(inputs['material model'])
    settings = setup_solver_settings(inputs.get('solver'))
    steps = setup_loading_steps(inputs['loading'])

    history = LoadingPath.run(materialPoint, steps, settings)
    print_history(history)

    if args.output_file is not None:
        onp.savez(args.output_file, **history._asdict())
        print('\nSaved loading history to %s' % args.output_file)

    print()
    print_banner('END MATERIALDRIVER LOGGING')
    return history


if __name__ == "__main__":
    main()
