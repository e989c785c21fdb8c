"""This module collects all gmpy2 functions used by CryptoVote.

All big-integer work of the Paillier cryptosystem goes through GMP:
modular exponentiation (square-and-multiply), probable prime search,
gcd/lcm and modular inversion. Results are gmpy2 mpz values, which the
callers convert back to Python ints at their API boundaries.
"""

import logging
from gmpy2 import version, is_prime, next_prime, powmod, gcd, lcm, invert

logging.debug(f'Load gmpy2 version {version()}')

__all__ = ['is_prime', 'next_prime', 'powmod', 'gcd', 'lcm', 'invert']
