"""CryptoVote is a Python package for privacy-preserving election tallies.

CryptoVote implements three cryptographic building blocks from first
principles: the AES-256 block cipher and the DES block cipher, both in
CBC mode, and Paillier's additively homomorphic public-key cryptosystem.

Ballots carry the voter's PII encrypted with AES or DES, next to a Paillier
encryption of the weight M^i of the chosen candidate i, where M exceeds the
maximum number of votes any candidate can get. Multiplying the Paillier
ciphertexts of all ballots yields a single ciphertext, which decrypts to
the sum of the weights, from which all counts are recovered at once by
writing the sum in base M.

Randomness is always passed explicitly, see cryptovote.random.RandomSource.
Arbitrary-precision arithmetic is done with the gmpy2 package.

Run python -m cryptovote -h for a simulated election from the command line.
"""

__version__ = '0.3.0'
__license__ = 'MIT License'

import sys
import argparse
import logging


def get_arg_parser():
    """Return parser for command line arguments controlling CryptoVote logging."""
    parser = argparse.ArgumentParser(add_help=False)

    group = parser.add_argument_group('CryptoVote logging')
    group.add_argument('--log-level', type=str, metavar='ll',
                       help='logging level ll=debug/info(default)/warning/error')
    group.add_argument('--no-log', action='store_true',
                       help='disable logging messages')

    parser.set_defaults(log_level='info')
    return parser


options = get_arg_parser().parse_known_args()[0]

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
logging.debug(f'On {sys.platform=}')

del options
