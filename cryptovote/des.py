"""DES block cipher and CBC mode, cf. FIPS PUB 46-3 and NIST SP 800-38A.

Blocks and keys are represented as 64-bit nonnegative integers, with bit 1
of the standard being the most significant bit. All permutation tables below
list 1-based bit positions in this numbering, exactly as published.

The key schedule drops the 8 parity bits with PC-1, splits the 56-bit
result into two 28-bit halves, rotates each half left by 1 or 2 positions
per round, and selects 48 bits with PC-2 as round subkey. A block goes through
the initial permutation IP, 16 Feistel rounds, a final swap of the halves,
and the final permutation FP = IP^-1. Decryption uses the subkeys in reverse.

Functions encrypt_cbc() and decrypt_cbc() work in place on a list of blocks,
without any padding. Functions encrypt() and decrypt() wrap these for byte
strings, prepending a random 8-byte IV to the ciphertext.
"""

import string
from cryptovote import padding
from cryptovote.errors import InvalidArgumentError

BLOCK_SIZE = 8
KEY_SIZE = 8

IP = (
    58, 50, 42, 34, 26, 18, 10, 2,
    60, 52, 44, 36, 28, 20, 12, 4,
    62, 54, 46, 38, 30, 22, 14, 6,
    64, 56, 48, 40, 32, 24, 16, 8,
    57, 49, 41, 33, 25, 17, 9, 1,
    59, 51, 43, 35, 27, 19, 11, 3,
    61, 53, 45, 37, 29, 21, 13, 5,
    63, 55, 47, 39, 31, 23, 15, 7,
)

FP = (
    40, 8, 48, 16, 56, 24, 64, 32,
    39, 7, 47, 15, 55, 23, 63, 31,
    38, 6, 46, 14, 54, 22, 62, 30,
    37, 5, 45, 13, 53, 21, 61, 29,
    36, 4, 44, 12, 52, 20, 60, 28,
    35, 3, 43, 11, 51, 19, 59, 27,
    34, 2, 42, 10, 50, 18, 58, 26,
    33, 1, 41, 9, 49, 17, 57, 25,
)

PC1 = (
    57, 49, 41, 33, 25, 17, 9,
    1, 58, 50, 42, 34, 26, 18,
    10, 2, 59, 51, 43, 35, 27,
    19, 11, 3, 60, 52, 44, 36,
    63, 55, 47, 39, 31, 23, 15,
    7, 62, 54, 46, 38, 30, 22,
    14, 6, 61, 53, 45, 37, 29,
    21, 13, 5, 28, 20, 12, 4,
)

PC2 = (
    14, 17, 11, 24, 1, 5,
    3, 28, 15, 6, 21, 10,
    23, 19, 12, 4, 26, 8,
    16, 7, 27, 20, 13, 2,
    41, 52, 31, 37, 47, 55,
    30, 40, 51, 45, 33, 48,
    44, 49, 39, 56, 34, 53,
    46, 42, 50, 36, 29, 32,
)

SHIFTS = (1, 1, 2, 2, 2, 2, 2, 2, 1, 2, 2, 2, 2, 2, 2, 1)

E = (
    32, 1, 2, 3, 4, 5,
    4, 5, 6, 7, 8, 9,
    8, 9, 10, 11, 12, 13,
    12, 13, 14, 15, 16, 17,
    16, 17, 18, 19, 20, 21,
    20, 21, 22, 23, 24, 25,
    24, 25, 26, 27, 28, 29,
    28, 29, 30, 31, 32, 1,
)

S_BOXES = (
    ((14, 4, 13, 1, 2, 15, 11, 8, 3, 10, 6, 12, 5, 9, 0, 7),
     (0, 15, 7, 4, 14, 2, 13, 1, 10, 6, 12, 11, 9, 5, 3, 8),
     (4, 1, 14, 8, 13, 6, 2, 11, 15, 12, 9, 7, 3, 10, 5, 0),
     (15, 12, 8, 2, 4, 9, 1, 7, 5, 11, 3, 14, 10, 0, 6, 13)),
    ((15, 1, 8, 14, 6, 11, 3, 4, 9, 7, 2, 13, 12, 0, 5, 10),
     (3, 13, 4, 7, 15, 2, 8, 14, 12, 0, 1, 10, 6, 9, 11, 5),
     (0, 14, 7, 11, 10, 4, 13, 1, 5, 8, 12, 6, 9, 3, 2, 15),
     (13, 8, 10, 1, 3, 15, 4, 2, 11, 6, 7, 12, 0, 5, 14, 9)),
    ((10, 0, 9, 14, 6, 3, 15, 5, 1, 13, 12, 7, 11, 4, 2, 8),
     (13, 7, 0, 9, 3, 4, 6, 10, 2, 8, 5, 14, 12, 11, 15, 1),
     (13, 6, 4, 9, 8, 15, 3, 0, 11, 1, 2, 12, 5, 10, 14, 7),
     (1, 10, 13, 0, 6, 9, 8, 7, 4, 15, 14, 3, 11, 5, 2, 12)),
    ((7, 13, 14, 3, 0, 6, 9, 10, 1, 2, 8, 5, 11, 12, 4, 15),
     (13, 8, 11, 5, 6, 15, 0, 3, 4, 7, 2, 12, 1, 10, 14, 9),
     (10, 6, 9, 0, 12, 11, 7, 13, 15, 1, 3, 14, 5, 2, 8, 4),
     (3, 15, 0, 6, 10, 1, 13, 8, 9, 4, 5, 11, 12, 7, 2, 14)),
    ((2, 12, 4, 1, 7, 10, 11, 6, 8, 5, 3, 15, 13, 0, 14, 9),
     (14, 11, 2, 12, 4, 7, 13, 1, 5, 0, 15, 10, 3, 9, 8, 6),
     (4, 2, 1, 11, 10, 13, 7, 8, 15, 9, 12, 5, 6, 3, 0, 14),
     (11, 8, 12, 7, 1, 14, 2, 13, 6, 15, 0, 9, 10, 4, 5, 3)),
    ((12, 1, 10, 15, 9, 2, 6, 8, 0, 13, 3, 4, 14, 7, 5, 11),
     (10, 15, 4, 2, 7, 12, 9, 5, 6, 1, 13, 14, 0, 11, 3, 8),
     (9, 14, 15, 5, 2, 8, 12, 3, 7, 0, 4, 10, 1, 13, 11, 6),
     (4, 3, 2, 12, 9, 5, 15, 10, 11, 14, 1, 7, 6, 0, 8, 13)),
    ((4, 11, 2, 14, 15, 0, 8, 13, 3, 12, 9, 7, 5, 10, 6, 1),
     (13, 0, 11, 7, 4, 9, 1, 10, 14, 3, 5, 12, 2, 15, 8, 6),
     (1, 4, 11, 13, 12, 3, 7, 14, 10, 15, 6, 8, 0, 5, 9, 2),
     (6, 11, 13, 8, 1, 4, 10, 7, 9, 5, 0, 15, 14, 2, 3, 12)),
    ((13, 2, 8, 4, 6, 15, 11, 1, 10, 9, 3, 14, 5, 0, 12, 7),
     (1, 15, 13, 8, 10, 3, 7, 4, 12, 5, 6, 11, 0, 14, 9, 2),
     (7, 11, 4, 1, 9, 12, 14, 2, 0, 6, 10, 13, 15, 3, 5, 8),
     (2, 1, 14, 7, 4, 10, 8, 13, 15, 12, 9, 0, 3, 5, 6, 11)),
)

P = (
    16, 7, 20, 21, 29, 12, 28, 17,
    1, 15, 23, 26, 5, 18, 31, 10,
    2, 8, 24, 14, 32, 27, 3, 9,
    19, 13, 30, 6, 22, 11, 4, 25,
)

_MASK28 = (1 << 28) - 1
_MASK32 = (1 << 32) - 1


def permute(x, table, n):
    """Permute the n-bit value x according to table.

    Output bit j (counted from the most significant bit) is input bit table[j].
    """
    y = 0
    for i in table:
        y = (y << 1) | ((x >> (n - i)) & 1)
    return y


def _rotl28(x, s):
    return ((x << s) | (x >> (28 - s))) & _MASK28


def key_schedule(key):
    """Return the 16 round subkeys of 48 bits for the 64-bit key."""
    k = permute(key, PC1, 64)
    c, d = k >> 28, k & _MASK28
    subkeys = []
    for s in SHIFTS:
        c, d = _rotl28(c, s), _rotl28(d, s)
        subkeys.append(permute((c << 28) | d, PC2, 56))
    return subkeys


def _f(r, k):
    """Feistel function of 32-bit half r and 48-bit subkey k."""
    x = permute(r, E, 32) ^ k
    y = 0
    for i, box in enumerate(S_BOXES):
        b = (x >> (42 - 6*i)) & 0x3F
        row = ((b & 0x20) >> 4) | (b & 1)  # outer two bits
        col = (b >> 1) & 0xF               # inner four bits
        y = (y << 4) | box[row][col]
    return permute(y, P, 32)


def _feistel(block, subkeys):
    x = permute(block, IP, 64)
    left, right = x >> 32, x & _MASK32
    for k in subkeys:
        left, right = right, left ^ _f(right, k)
    return permute((right << 32) | left, FP, 64)


def encrypt_block(block, subkeys):
    """DES encryption of 64-bit block given the 16 subkeys."""
    return _feistel(block, subkeys)


def decrypt_block(block, subkeys):
    """DES decryption of 64-bit block given the 16 subkeys."""
    return _feistel(block, subkeys[::-1])


def encrypt_cbc(blocks, key, iv):
    """CBC encryption of list of 64-bit blocks in place, for 64-bit key and iv."""
    subkeys = key_schedule(key)
    c = iv
    for i, p in enumerate(blocks):
        c = blocks[i] = encrypt_block(p ^ c, subkeys)


def decrypt_cbc(blocks, key, iv):
    """CBC decryption of list of 64-bit blocks in place, for 64-bit key and iv."""
    subkeys = key_schedule(key)
    c = iv
    for i, b in enumerate(blocks):
        blocks[i] = decrypt_block(b, subkeys) ^ c
        c = b  # chain on the ciphertext, not on the decrypted block


def to_blocks(data):
    """Split block-aligned bytes into 64-bit big-endian integers."""
    return [int.from_bytes(data[i:i + BLOCK_SIZE], byteorder='big')
            for i in range(0, len(data), BLOCK_SIZE)]


def from_blocks(blocks):
    """Concatenate 64-bit integers into bytes, big-endian."""
    return b''.join(b.to_bytes(BLOCK_SIZE, byteorder='big') for b in blocks)


def _check_key(key):
    key = bytes(key)
    if len(key) != KEY_SIZE:
        raise InvalidArgumentError(f'DES key must be {KEY_SIZE} bytes, got {len(key)}')

    return int.from_bytes(key, byteorder='big')


def generate_key(rng):
    """Random 64-bit DES key (56 effective bits, parity bits ignored)."""
    return rng.randbytes(KEY_SIZE)


def generate_iv(rng):
    """Random 8-byte initialization vector."""
    return rng.randbytes(BLOCK_SIZE)


def key_from_hex(text):
    """Parse a DES key given as 1 up to 16 hexadecimal digits."""
    text = text.strip()
    if not 0 < len(text) <= 2 * KEY_SIZE:
        raise InvalidArgumentError(f'hex key must have 1 up to {2 * KEY_SIZE} digits')

    if not all(ch in string.hexdigits for ch in text):
        raise InvalidArgumentError('hex key contains non-hexadecimal characters')

    return int(text, 16).to_bytes(KEY_SIZE, byteorder='big')


def encrypt(plaintext, key, rng, padding_scheme='pkcs7'):
    """Encrypt plaintext under 8-byte key in CBC mode, returning IV || ciphertext."""
    k = _check_key(key)
    data = padding.pad(padding.to_bytes(plaintext), BLOCK_SIZE, padding_scheme)
    iv = generate_iv(rng)
    blocks = to_blocks(data)
    encrypt_cbc(blocks, k, int.from_bytes(iv, byteorder='big'))
    return iv + from_blocks(blocks)


def decrypt(message, key, padding_scheme='pkcs7'):
    """Decrypt CBC message IV || ciphertext under 8-byte key, returning the plaintext bytes."""
    k = _check_key(key)
    iv, ciphertext = padding.split_message(message, BLOCK_SIZE)
    blocks = to_blocks(ciphertext)
    decrypt_cbc(blocks, k, int.from_bytes(iv, byteorder='big'))
    return padding.unpad(from_blocks(blocks), BLOCK_SIZE, padding_scheme)
