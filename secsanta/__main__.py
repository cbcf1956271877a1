"""Run Secret Santa from the command line.

To let m participants (default m=10) draw their recipients, run:

    python -m secsanta -M m

Use -L to set the bit length of the group modulus (default 2048, RFC 7919 group
ffdhe2048), and --workers for parallel key generation. Run with -H for help.

All participants are simulated in this process, and the full assignment is
printed, one line per participant.
"""

import secsanta
from secsanta.protocol import SecretSanta


def main():
    parser = secsanta.get_arg_parser()
    options = parser.parse_known_args()[0]
    if options.HELP:
        parser.print_help()
        return

    if options.VERSION:
        print(f'SecSanta {secsanta.__version__}')
        return

    santa = SecretSanta(options.M, l=options.bit_length)
    print(f'New secret santa among {options.M} players!')
    santa.assign()
    for p in santa.participants:
        print(f'{p.pid} gives a present to: {p.recipient}')


if __name__ == '__main__':
    main()
