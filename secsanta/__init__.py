"""SecSanta is a Python package for decentralized Secret Santa assignments.

N participants jointly generate a random derangement, that is, a permutation
of the participants without fixed points, such that every participant learns
whom she gives a present to, and nothing else. No trusted coordinator is used.

The protocol is a mix-net style shuffle of ElGamal ciphertexts. Each participant
contributes her public key g^x as an encryption of 1 with randomness 1. Then each
participant in turn randomly permutes the list of ciphertexts and raises all
entries to the same secret random exponent y. Finally, every participant raises
the common first component of the ciphertexts to her private key x, and looks up
the position of her own (blinded) public key in the list. If any participant finds
herself at her own position, the whole protocol is restarted from scratch.

The finite groups (RFC 7919 groups and quadratic residues modulo safe primes)
are built on the gmpy2 package for big-integer arithmetic.

Trust assumption: participants are honest-but-curious. Nothing forces a
participant to apply a uniformly random permutation in her round; a participant
applying the identity permutation (or a chosen one) is not detected.
"""

__version__ = '0.3.1'
__license__ = 'MIT License'

import os
import sys
import argparse
import logging


def get_arg_parser():
    """Return parser for command line arguments passed to SecSanta."""
    parser = argparse.ArgumentParser(add_help=False)

    group = parser.add_argument_group('SecSanta help')
    group.add_argument('-V', '--VERSION', action='store_true',
                       help='print SecSanta version number and exit')
    group.add_argument('-H', '--HELP', action='store_true',
                       help='print this help message for SecSanta and exit')

    group = parser.add_argument_group('SecSanta configuration')
    group.add_argument('-M', type=int, metavar='m',
                       help='use m participants, m>=2')
    group.add_argument('-L', '--bit-length', type=int, metavar='l',
                       help='bit length l of the group modulus')
    group.add_argument('--workers', type=int, metavar='w',
                       help='maximum number of worker threads for key generation')

    group = parser.add_argument_group('SecSanta misc')
    group.add_argument('--log-level', type=str, metavar='ll',
                       help='logging level ll=debug/info(default)/warning/error')
    group.add_argument('--no-log', action='store_true',
                       help='disable logging messages')

    parser.set_defaults(M=10, log_level='info')
    return parser


options = get_arg_parser().parse_known_args()[0]
if options.VERSION or options.HELP:
    options.no_log = True

# Set logging level as early as possible.
if options.no_log:
    logging.basicConfig(level=logging.WARNING)
else:
    ch = options.log_level[0].upper()
    ch = {'N': '0', 'D': '1', 'I': '2', 'W': '3', 'E': '4', 'C': '5'}.get(ch, ch)
    ch = ch if '0' <= ch <= '5' else '0'  # default to '0'
    level = int(ch)
    level = (logging.NOTSET, logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR,
             logging.CRITICAL)[level]
    if sys.flags.dev_mode:
        level = logging.DEBUG
    logging.basicConfig(format='{asctime} {message}', style='{', level=level, stream=sys.stdout)
    logging.debug(f'Set logging level to {level}: {logging.getLevelName(level)}')
    del ch, level

# Worker threads for key generation, 0 means no threads.
env_max_workers = os.getenv('SECSANTA_MAXWORKERS')  # check if SECSANTA_MAXWORKERS is set
if not env_max_workers:
    if options.workers is None:
        options.workers = 0
    os.environ['SECSANTA_MAXWORKERS'] = str(options.workers)
logging.debug(f'Number of worker threads maximum set to {os.getenv("SECSANTA_MAXWORKERS")}')

# Bit length of the group modulus, 2048 selects RFC 7919 group ffdhe2048.
env_bit_length = os.getenv('SECSANTA_BITLENGTH')  # check if SECSANTA_BITLENGTH is set
if not env_bit_length:
    if options.bit_length is None:
        options.bit_length = 2048
    os.environ['SECSANTA_BITLENGTH'] = str(options.bit_length)
logging.debug(f'Group bit length set to {os.getenv("SECSANTA_BITLENGTH")}')

del options, env_max_workers, env_bit_length
