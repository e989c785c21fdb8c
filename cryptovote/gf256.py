"""This module supports byte arithmetic in the AES field GF(2^8).

A field element is a byte b_7 ... b_1 b_0, standing for the polynomial
b_7 x^7 + ... + b_1 x + b_0 over GF(2), reduced modulo the AES
polynomial x^8 + x^4 + x^3 + x + 1, which is 0x11B as an integer.

Addition is XOR. Multiplication by x is done with xtime(), and general
multiplication with gmul() by repeated doubling. Multiplicative inverses
are computed as a^254, with 0 mapped to 0 as in the AES S-box.
"""

MODULUS = 0x11B


def xtime(a):
    """Multiply byte a by x modulo the AES polynomial."""
    a <<= 1
    if a & 0x100:
        a ^= MODULUS
    return a


def gmul(a, b):
    """Multiply bytes a and b in GF(2^8)."""
    p = 0
    while b:
        if b & 1:
            p ^= a
        a = xtime(a)
        b >>= 1
    return p


def power(a, n):
    """Raise byte a to the nonnegative power n."""
    c = 1
    while n:
        if n & 1:
            c = gmul(c, a)
        a = gmul(a, a)
        n >>= 1
    return c


def inverse(a):
    """Multiplicative inverse of byte a, where 0 is mapped to 0."""
    return power(a, 254)
