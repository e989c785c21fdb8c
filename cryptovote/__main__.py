"""Simulated election from the command line.

To run a simulated election with 3 candidates, at most 100 voters,
and 25 ballots cast, using AES-256 for the PII and 1024-bit Paillier keys:

    python -m cryptovote -C 3 -k 100 -n 25

Use --cipher des to encrypt the PII with DES instead, --decrypt i to
audit ballot i, and --json to get the report as JSON instead of text.
Defaults for the key size and the number of worker threads can be set
with environment variables CRYPTOVOTE_KEYSIZE and CRYPTOVOTE_MAXWORKERS.
"""

import os
import sys
import json
import argparse
import logging
import cryptovote
from cryptovote import ballots
from cryptovote import simulation
from cryptovote.errors import CryptoVoteError
from cryptovote.random import RandomSource


def get_arg_parser():
    """Return parser for the command line arguments of a simulated election."""
    parser = argparse.ArgumentParser(prog='python -m cryptovote',
                                     description='Simulated election with homomorphic tally.',
                                     parents=[cryptovote.get_arg_parser()])
    parser.add_argument('-V', '--VERSION', action='store_true',
                        help='print CryptoVote version number and exit')

    group = parser.add_argument_group('election parameters')
    group.add_argument('-C', '--candidates', type=int, metavar='c',
                       help='number of candidates c>0')
    group.add_argument('-k', '--max-voters', type=int, metavar='k',
                       help='maximum number of voters k>=0, giving base M=k+1')
    group.add_argument('-n', '--votes', type=int, metavar='n',
                       help='number of votes n>=0 to simulate')

    group = parser.add_argument_group('cryptographic parameters')
    group.add_argument('-K', '--key-size', type=int, metavar='b',
                       help='bit length b of Paillier modulus')
    group.add_argument('--cipher', choices=sorted(ballots.CIPHERS),
                       help='symmetric cipher for PII (default aes)')
    group.add_argument('--seed', type=int, metavar='s',
                       help='seed s for reproducible (insecure) randomness')
    group.add_argument('-W', '--workers', type=int, metavar='w',
                       help='number of worker threads w for encrypting ballots')

    group = parser.add_argument_group('output')
    group.add_argument('--decrypt', type=int, metavar='i', action='append', default=[],
                       help='decrypt ballot i after the tally (repeatable)')
    group.add_argument('--json', action='store_true',
                       help='print report as JSON')
    group.add_argument('--ballots', action='store_true',
                       help='include encrypted ballots in JSON report')

    parser.set_defaults(candidates=3, max_voters=100, votes=10, cipher='aes',
                        key_size=None, workers=None)
    return parser


def env_int(parser, name, default):
    """Integer value of environment variable name, or default if it is not set."""
    value = os.getenv(name)
    if value is None:
        return default

    try:
        return int(value)
    except ValueError:
        parser.error(f'environment variable {name}={value!r} is not an integer')


def check_args(parser, args):
    """Validate election parameters before they reach the core.

    Key size and number of workers not given on the command line are taken
    from the environment.
    """
    if args.key_size is None:
        args.key_size = env_int(parser, 'CRYPTOVOTE_KEYSIZE', 1024)
    if args.workers is None:
        args.workers = env_int(parser, 'CRYPTOVOTE_MAXWORKERS', 0)
    if args.candidates <= 0:
        parser.error('number of candidates must be positive')
    if args.max_voters < 0:
        parser.error('maximum number of voters must be nonnegative')
    if args.votes < 0:
        parser.error('number of votes must be nonnegative')
    if args.key_size < 16:
        parser.error('key size must be at least 16 bits')
    if args.workers < 0:
        parser.error('number of workers must be nonnegative')
    for i in args.decrypt:
        if not 0 <= i < args.votes:
            parser.error(f'ballot index {i} out of range 0..{args.votes - 1}')


def print_report(result):
    """Print human-readable results of the simulated election."""
    print('--- Simulation Results ---')
    print(f'Decrypted total sum: {result.total} (M={result.M})')
    if result.counts is None:
        print(f'Total sum out of range for {result.num_candidates} candidates, '
              f'counts not decoded (expected {result.actual_counts})')
    else:
        for i, (count, actual) in enumerate(zip(result.counts, result.actual_counts)):
            status = 'Passed' if count == actual else f'FAIL, expected {actual}'
            print(f' Candidate {i}: {count} votes (Verification: {status})')
        print(f'Total votes decoded: {sum(result.counts)} of {result.num_votes}')
    if result.verified:
        print('SUCCESS: tally verified.')
    else:
        print('FAILED: discrepancy found in tally.')


def print_ballot(index, pii, weight):
    print(f'--- Ballot #{index} ---')
    print(f' Decrypted PII: "{pii}"')
    print(f' Decrypted vote weight (M^i): {weight}')


def main(argv=None):
    parser = get_arg_parser()
    args = parser.parse_args(argv)
    if args.VERSION:
        print(f'CryptoVote {cryptovote.__version__}')
        return 0

    check_args(parser, args)
    try:
        with RandomSource(args.seed) as rng:
            if rng.seeded:
                logging.warning('Seeded randomness is not secure, use for testing only')
            result = simulation.simulate(args.candidates, args.max_voters, args.votes, rng,
                                         key_size=args.key_size, cipher=args.cipher,
                                         workers=args.workers)
        audits = [(i, *result.decrypt_ballot(i)) for i in args.decrypt]
    except CryptoVoteError as exc:
        logging.error(f'Simulation aborted: {exc}')
        return 1

    if args.json:
        obj = result.to_json(include_ballots=args.ballots)
        obj['decrypted'] = [{'index': i, 'pii': pii, 'weight': w} for i, pii, w in audits]
        print(json.dumps(obj, indent=2))
    else:
        print_report(result)
        for audit in audits:
            print_ballot(*audit)
    return 0 if result.verified else 2


if __name__ == '__main__':
    sys.exit(main())
