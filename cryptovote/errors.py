"""Exceptions raised by CryptoVote.

Two kinds of failure are distinguished. An InvalidArgumentError signals bad
input from the caller, such as a ciphertext of the wrong length. A NoInverseError
signals that a modular inverse does not exist, which points at a defect in key
generation rather than at the caller.

Both derive from the matching built-in exception, so code catching ValueError
or ZeroDivisionError (as raised by gmpy2) keeps working.
"""


class CryptoVoteError(Exception):
    """Base class for all CryptoVote errors."""


class InvalidArgumentError(CryptoVoteError, ValueError):
    """Invalid argument passed by the caller."""


class NoInverseError(CryptoVoteError, ZeroDivisionError):
    """Modular inverse does not exist."""
