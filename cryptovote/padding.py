"""Padding schemes shared by the CBC wrappers of the AES and DES engines.

Two schemes are supported:

    'pkcs7': append k bytes of value k, with 1 <= k <= block size.
             Unambiguous, also for plaintexts ending in zero bytes.
    'zero':  append zero bytes up to a multiple of the block size, where
             an empty plaintext still yields one block. Unpadding strips
             all trailing zero bytes, hence it is lossy for plaintexts
             ending in zero bytes.

Plaintexts given as str are encoded as UTF-8 first.
"""

from cryptovote.errors import InvalidArgumentError

SCHEMES = ('pkcs7', 'zero')


def to_bytes(plaintext):
    """Return plaintext as bytes, encoding str as UTF-8."""
    if isinstance(plaintext, str):
        return plaintext.encode('utf-8')

    return bytes(plaintext)


def xor(a, b):
    """Bytewise XOR of equal-length a and b."""
    return bytes(x ^ y for x, y in zip(a, b))


def _check_scheme(scheme):
    if scheme not in SCHEMES:
        raise InvalidArgumentError(f'unknown padding scheme {scheme!r}, '
                                   f'choose from {", ".join(SCHEMES)}')


def pad(data, block_size, scheme='pkcs7'):
    """Pad data to a positive multiple of block_size."""
    _check_scheme(scheme)
    if scheme == 'pkcs7':
        k = block_size - len(data) % block_size
        return data + bytes([k]) * k

    n = max(1, -(-len(data) // block_size))  # at least one block
    return data + bytes(n * block_size - len(data))


def unpad(data, block_size, scheme='pkcs7'):
    """Remove padding from data."""
    _check_scheme(scheme)
    if scheme == 'pkcs7':
        k = data[-1] if data else 0
        if not 1 <= k <= block_size or data[-k:] != bytes([k]) * k:
            raise InvalidArgumentError('malformed PKCS#7 padding')

        return data[:-k]

    return data.rstrip(b'\x00')


def split_message(data, block_size):
    """Split CBC message data into IV and ciphertext.

    The ciphertext must be a positive multiple of block_size.
    """
    data = bytes(data)
    if len(data) < 2 * block_size or len(data) % block_size:
        raise InvalidArgumentError(f'CBC message of {len(data)} bytes is not an IV followed '
                                   f'by a positive multiple of {block_size} bytes')

    return data[:block_size], data[block_size:]
