"""AES-256 block cipher and CBC mode, cf. FIPS PUB 197 and NIST SP 800-38A.

The 32-byte key is expanded into 15 round keys of 16 bytes each. A block
is transformed by an initial AddRoundKey followed by 14 rounds of SubBytes,
ShiftRows, MixColumns (omitted in the last round) and AddRoundKey. The state
is kept as a flat list of 16 bytes in column-major order, so byte i lives in
row i%4 and column i//4.

The CBC wrapper prepends a random 16-byte IV to the ciphertext:

    encrypt(plaintext, key, rng) -> IV || ciphertext
    decrypt(IV || ciphertext, key) -> plaintext

See cryptovote.padding for the supported padding schemes.
"""

from cryptovote import gf256
from cryptovote import padding
from cryptovote.errors import InvalidArgumentError

BLOCK_SIZE = 16
KEY_SIZE = 32
NK = KEY_SIZE // 4  # number of 32-bit words in the key
ROUNDS = 14

SBOX = bytes((
    0x63, 0x7c, 0x77, 0x7b, 0xf2, 0x6b, 0x6f, 0xc5, 0x30, 0x01, 0x67, 0x2b, 0xfe, 0xd7, 0xab, 0x76,
    0xca, 0x82, 0xc9, 0x7d, 0xfa, 0x59, 0x47, 0xf0, 0xad, 0xd4, 0xa2, 0xaf, 0x9c, 0xa4, 0x72, 0xc0,
    0xb7, 0xfd, 0x93, 0x26, 0x36, 0x3f, 0xf7, 0xcc, 0x34, 0xa5, 0xe5, 0xf1, 0x71, 0xd8, 0x31, 0x15,
    0x04, 0xc7, 0x23, 0xc3, 0x18, 0x96, 0x05, 0x9a, 0x07, 0x12, 0x80, 0xe2, 0xeb, 0x27, 0xb2, 0x75,
    0x09, 0x83, 0x2c, 0x1a, 0x1b, 0x6e, 0x5a, 0xa0, 0x52, 0x3b, 0xd6, 0xb3, 0x29, 0xe3, 0x2f, 0x84,
    0x53, 0xd1, 0x00, 0xed, 0x20, 0xfc, 0xb1, 0x5b, 0x6a, 0xcb, 0xbe, 0x39, 0x4a, 0x4c, 0x58, 0xcf,
    0xd0, 0xef, 0xaa, 0xfb, 0x43, 0x4d, 0x33, 0x85, 0x45, 0xf9, 0x02, 0x7f, 0x50, 0x3c, 0x9f, 0xa8,
    0x51, 0xa3, 0x40, 0x8f, 0x92, 0x9d, 0x38, 0xf5, 0xbc, 0xb6, 0xda, 0x21, 0x10, 0xff, 0xf3, 0xd2,
    0xcd, 0x0c, 0x13, 0xec, 0x5f, 0x97, 0x44, 0x17, 0xc4, 0xa7, 0x7e, 0x3d, 0x64, 0x5d, 0x19, 0x73,
    0x60, 0x81, 0x4f, 0xdc, 0x22, 0x2a, 0x90, 0x88, 0x46, 0xee, 0xb8, 0x14, 0xde, 0x5e, 0x0b, 0xdb,
    0xe0, 0x32, 0x3a, 0x0a, 0x49, 0x06, 0x24, 0x5c, 0xc2, 0xd3, 0xac, 0x62, 0x91, 0x95, 0xe4, 0x79,
    0xe7, 0xc8, 0x37, 0x6d, 0x8d, 0xd5, 0x4e, 0xa9, 0x6c, 0x56, 0xf4, 0xea, 0x65, 0x7a, 0xae, 0x08,
    0xba, 0x78, 0x25, 0x2e, 0x1c, 0xa6, 0xb4, 0xc6, 0xe8, 0xdd, 0x74, 0x1f, 0x4b, 0xbd, 0x8b, 0x8a,
    0x70, 0x3e, 0xb5, 0x66, 0x48, 0x03, 0xf6, 0x0e, 0x61, 0x35, 0x57, 0xb9, 0x86, 0xc1, 0x1d, 0x9e,
    0xe1, 0xf8, 0x98, 0x11, 0x69, 0xd9, 0x8e, 0x94, 0x9b, 0x1e, 0x87, 0xe9, 0xce, 0x55, 0x28, 0xdf,
    0x8c, 0xa1, 0x89, 0x0d, 0xbf, 0xe6, 0x42, 0x68, 0x41, 0x99, 0x2d, 0x0f, 0xb0, 0x54, 0xbb, 0x16,
))

INV_SBOX = bytes(SBOX.index(x) for x in range(256))

RCON = (0x00, 0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40)  # RCON[i] = x^(i-1) in GF(2^8)


def _check_key(key):
    key = bytes(key)
    if len(key) != KEY_SIZE:
        raise InvalidArgumentError(f'AES-256 key must be {KEY_SIZE} bytes, got {len(key)}')

    return key


def expand_key(key):
    """AES-256 key expansion into 15 round keys of 16 bytes."""
    key = _check_key(key)
    w = [list(key[4*i:4*i + 4]) for i in range(NK)]
    for i in range(NK, 4 * (ROUNDS + 1)):
        t = w[i - 1]
        if i % NK == 0:
            t = [SBOX[b] for b in t[1:] + t[:1]]  # SubWord(RotWord(t))
            t[0] ^= RCON[i // NK]
        elif i % NK == 4:
            t = [SBOX[b] for b in t]
        w.append([a ^ b for a, b in zip(w[i - NK], t)])
    return [bytes(sum(w[4*r:4*r + 4], [])) for r in range(ROUNDS + 1)]


def _add_round_key(s, k):
    return [a ^ b for a, b in zip(s, k)]


def _shift_rows(s):
    # row r is rotated left by r positions
    return [s[(i + 4 * (i % 4)) % 16] for i in range(16)]


def _inv_shift_rows(s):
    return [s[(i - 4 * (i % 4)) % 16] for i in range(16)]


def _mix_columns(s):
    t = []
    for c in range(0, 16, 4):
        a0, a1, a2, a3 = s[c:c + 4]
        x0, x1, x2, x3 = map(gf256.xtime, (a0, a1, a2, a3))
        t += [x0 ^ x1 ^ a1 ^ a2 ^ a3,
              a0 ^ x1 ^ x2 ^ a2 ^ a3,
              a0 ^ a1 ^ x2 ^ x3 ^ a3,
              x0 ^ a0 ^ a1 ^ a2 ^ x3]
    return t


def _inv_mix_columns(s):
    gmul = gf256.gmul
    t = []
    for c in range(0, 16, 4):
        a0, a1, a2, a3 = s[c:c + 4]
        t += [gmul(a0, 14) ^ gmul(a1, 11) ^ gmul(a2, 13) ^ gmul(a3, 9),
              gmul(a0, 9) ^ gmul(a1, 14) ^ gmul(a2, 11) ^ gmul(a3, 13),
              gmul(a0, 13) ^ gmul(a1, 9) ^ gmul(a2, 14) ^ gmul(a3, 11),
              gmul(a0, 11) ^ gmul(a1, 13) ^ gmul(a2, 9) ^ gmul(a3, 14)]
    return t


def encrypt_block(block, round_keys):
    """AES encryption of one 16-byte block given key schedule round_keys."""
    s = _add_round_key(block, round_keys[0])
    for r in range(1, ROUNDS + 1):
        s = _shift_rows([SBOX[b] for b in s])
        if r < ROUNDS:
            s = _mix_columns(s)
        s = _add_round_key(s, round_keys[r])
    return bytes(s)


def decrypt_block(block, round_keys):
    """AES decryption of one 16-byte block given key schedule round_keys."""
    s = list(block)
    for r in range(ROUNDS, 0, -1):
        s = _add_round_key(s, round_keys[r])
        if r < ROUNDS:
            s = _inv_mix_columns(s)
        s = [INV_SBOX[b] for b in _inv_shift_rows(s)]
    return bytes(_add_round_key(s, round_keys[0]))


def encrypt_cbc(data, round_keys, iv):
    """CBC encryption of block-aligned data, without IV in the output."""
    if len(data) % BLOCK_SIZE:
        raise InvalidArgumentError(f'data length {len(data)} not a multiple of {BLOCK_SIZE}')

    out = bytearray()
    c = iv
    for i in range(0, len(data), BLOCK_SIZE):
        c = encrypt_block(padding.xor(data[i:i + BLOCK_SIZE], c), round_keys)
        out += c
    return bytes(out)


def decrypt_cbc(data, round_keys, iv):
    """CBC decryption of block-aligned data."""
    if len(data) % BLOCK_SIZE:
        raise InvalidArgumentError(f'data length {len(data)} not a multiple of {BLOCK_SIZE}')

    out = bytearray()
    c = iv
    for i in range(0, len(data), BLOCK_SIZE):
        block = data[i:i + BLOCK_SIZE]
        out += padding.xor(decrypt_block(block, round_keys), c)
        c = block  # chain on the ciphertext, not on the decrypted block
    return bytes(out)


def generate_key(rng):
    """Random 256-bit AES key."""
    return rng.randbytes(KEY_SIZE)


def generate_iv(rng):
    """Random 16-byte initialization vector."""
    return rng.randbytes(BLOCK_SIZE)


def key_from_hex(text):
    """Parse an AES-256 key given as 64 hexadecimal digits."""
    text = ''.join(text.split())
    if len(text) != 2 * KEY_SIZE:
        raise InvalidArgumentError(f'hex key must be exactly {2 * KEY_SIZE} digits long')

    try:
        return bytes.fromhex(text)
    except ValueError:
        raise InvalidArgumentError('hex key contains non-hexadecimal characters') from None


def encrypt(plaintext, key, rng, padding_scheme='pkcs7'):
    """Encrypt plaintext under key in CBC mode, returning IV || ciphertext."""
    round_keys = expand_key(key)
    data = padding.pad(padding.to_bytes(plaintext), BLOCK_SIZE, padding_scheme)
    iv = generate_iv(rng)
    return iv + encrypt_cbc(data, round_keys, iv)


def decrypt(message, key, padding_scheme='pkcs7'):
    """Decrypt CBC message IV || ciphertext under key, returning the plaintext bytes."""
    round_keys = expand_key(key)
    iv, ciphertext = padding.split_message(message, BLOCK_SIZE)
    data = decrypt_cbc(ciphertext, round_keys, iv)
    return padding.unpad(data, BLOCK_SIZE, padding_scheme)
