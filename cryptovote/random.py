"""This module provides the source of randomness for CryptoVote.

Every function needing random bits takes a RandomSource as an explicit
argument: key generation, IV generation, prime candidates, and the Paillier
blinding factors. There is no module-level generator.

By default, a RandomSource draws from the operating system's CSPRNG,
via random.SystemRandom. Passing a seed gives a reproducible Mersenne
Twister instead, which is only meant for tests and demos.

A RandomSource is internally synchronized, hence a single instance can be
shared by several threads encrypting ballots in parallel.
"""

import random
import threading


class RandomSource:
    """Explicit, thread-safe source of random bits."""

    __slots__ = '_rng', '_lock', 'seeded'

    def __init__(self, seed=None):
        if seed is None:
            self._rng = random.SystemRandom()
        else:
            self._rng = random.Random(seed)
        self._lock = threading.Lock()
        self.seeded = seed is not None

    def _generator(self):
        if self._rng is None:
            raise RuntimeError('random source is closed')

        return self._rng

    def getrandbits(self, k):
        """Uniformly random nonnegative k-bit integer."""
        with self._lock:
            return self._generator().getrandbits(k)

    def randbelow(self, n):
        """Uniformly random integer in range(n), for n > 0."""
        with self._lock:
            return self._generator().randrange(n)

    def randbytes(self, n):
        """Return n random bytes."""
        if n == 0:
            return b''

        with self._lock:
            x = self._generator().getrandbits(8 * n)
        return x.to_bytes(n, byteorder='big')

    def choice(self, seq):
        """Uniformly random element from nonempty sequence seq."""
        with self._lock:
            return self._generator().choice(seq)

    def close(self):
        """Release the underlying generator; further draws raise RuntimeError."""
        with self._lock:
            self._rng = None

    @property
    def closed(self):
        return self._rng is None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
