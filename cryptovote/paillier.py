"""Paillier's additively homomorphic public-key cryptosystem.

Key generation picks two random probable primes p and q of half the modulus
size and sets

    n = p q,  g = n + 1,  lambda = lcm(p-1, q-1),
    mu = L(g^lambda mod n^2)^-1 mod n,  where L(x) = (x-1) / n.

A plaintext 0 <= m < n is encrypted as c = g^m r^n mod n^2, for a random
r in [1, n) coprime to n, and decrypted as m = L(c^lambda mod n^2) mu mod n.

Multiplying ciphertexts modulo n^2 adds the underlying plaintexts modulo n.
This is used to tally encrypted votes without decrypting individual ballots.

All modular exponentiations, prime searches and inversions use gmpy2.
"""

import string
from cryptovote import gmpy
from cryptovote.errors import InvalidArgumentError, NoInverseError


class PublicKey:
    """Paillier public key (n, n^2, g)."""

    __slots__ = 'n', 'n_square', 'g'

    def __init__(self, n):
        self.n = n
        self.n_square = n * n
        self.g = n + 1

    def __eq__(self, other):
        if not isinstance(other, PublicKey):
            return NotImplemented

        return self.n == other.n

    def __hash__(self):
        return hash((type(self), self.n))

    def __repr__(self):
        return f'PublicKey(n={self.n.bit_length()} bits)'


class PrivateKey:
    """Paillier private key (lambda, mu) for the given public key."""

    __slots__ = 'public_key', 'lam', 'mu'

    def __init__(self, public_key, lam, mu):
        self.public_key = public_key
        self.lam = lam
        self.mu = mu

    def __repr__(self):
        return f'PrivateKey({self.public_key!r})'  # never show lambda, mu


def L_function(x, n):
    """Return (x-1) / n, using exact integer division."""
    if n <= 0:
        raise InvalidArgumentError('modulus n must be positive')

    return (x - 1) // n


def mod_inverse(a, n):
    """Return the inverse of a modulo n.

    Raises NoInverseError if gcd(a, n) != 1.
    """
    try:
        return int(gmpy.invert(a, n))
    except ZeroDivisionError:
        raise NoInverseError(f'{a} has no inverse modulo {n}') from None


def random_coprime(n, rng):
    """Uniformly random r with 1 <= r < n and gcd(r, n) = 1."""
    if n <= 1:
        raise InvalidArgumentError('n must be greater than 1')

    while True:
        r = rng.randbelow(n)
        if r and gmpy.gcd(r, n) == 1:
            return r


def generate_prime(bits, rng):
    """Return a probable prime of (about) the given bit length.

    A random candidate with top and bottom bit set is advanced to the next
    probable prime.
    """
    if bits < 2:
        raise InvalidArgumentError('prime must have at least 2 bits')

    x = rng.getrandbits(bits) | (1 << (bits - 1)) | 1
    return int(gmpy.next_prime(x))


def generate_keypair(bit_size, rng):
    """Generate Paillier key pair with modulus n of bit_size bits.

    Return public key and private key.
    """
    if bit_size < 16:
        raise InvalidArgumentError('modulus must have at least 16 bits')

    prime_bits = bit_size // 2
    p = generate_prime(prime_bits, rng)
    q = generate_prime(prime_bits, rng)
    while q == p:
        q = generate_prime(prime_bits, rng)
    public_key = PublicKey(p * q)
    n, n2 = public_key.n, public_key.n_square
    lam = int(gmpy.lcm(p - 1, q - 1))
    mu = mod_inverse(L_function(int(gmpy.powmod(public_key.g, lam, n2)), n), n)
    return public_key, PrivateKey(public_key, lam, mu)


def encrypt(public_key, m, rng):
    """Encrypt plaintext m, 0 <= m < n, under public_key."""
    n, n2 = public_key.n, public_key.n_square
    if not 0 <= m < n:
        raise InvalidArgumentError('plaintext out of range [0, n)')

    r = random_coprime(n, rng)
    return int(gmpy.powmod(public_key.g, m, n2) * gmpy.powmod(r, n, n2) % n2)


def decrypt(private_key, c):
    """Decrypt ciphertext c, 0 <= c < n^2, using private_key."""
    n, n2 = private_key.public_key.n, private_key.public_key.n_square
    if not 0 <= c < n2:
        raise InvalidArgumentError('ciphertext out of range [0, n^2)')

    u = int(gmpy.powmod(c, private_key.lam, n2))
    return L_function(u, n) * private_key.mu % n


def add(public_key, c1, c2):
    """Homomorphic addition: ciphertext of (m1 + m2) mod n."""
    return c1 * c2 % public_key.n_square


def sum_ciphertexts(public_key, ciphertexts):
    """Homomorphic sum of a nonempty iterable of ciphertexts."""
    it = iter(ciphertexts)
    try:
        s = next(it)
    except StopIteration:
        raise InvalidArgumentError('no ciphertexts to sum') from None

    for c in it:
        s = add(public_key, s, c)
    return s


def to_hex(c):
    """Textual form of ciphertext c."""
    return format(c, 'x')


def from_hex(s):
    """Ciphertext from its textual form, a nonempty string of hex digits.

    Signs, 0x prefixes, underscores and whitespace are rejected.
    """
    if not isinstance(s, str) or not s or not all(ch in string.hexdigits for ch in s):
        raise InvalidArgumentError('ciphertext is not a hexadecimal string')

    return int(s, 16)
