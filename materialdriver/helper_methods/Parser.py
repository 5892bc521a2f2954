import yaml


BANNER = '#' * 70


def parse_yaml_input_file(input_file: str) -> dict:
    """Read an input file into a dict of blocks keyed by block name."""
    with open(input_file, 'rb') as f:
        try:
            blocks = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError('Could not parse yaml input file %s' % input_file) from e
    if not isinstance(blocks, dict):
        raise ValueError('Input file %s does not contain any blocks' % input_file)
    return blocks


def print_banner(title: str) -> None:
    print(BANNER)
    print('# %s' % title)
    print(BANNER + '\n')


def dump_input_file(input_file: str) -> None:
    with open(input_file, 'r') as f:
        lines = f.read().splitlines()

    print_banner('BEGIN INPUT FILE DUMP')
    for n, line in enumerate(lines, start=1):
        print('%4d | %s' % (n, line))
    print()
    print_banner('END INPUT FILE DUMP')
