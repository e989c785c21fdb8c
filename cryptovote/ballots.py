"""Encrypted ballots and their homomorphic tally.

An encrypted ballot holds the voter's PII (personally identifiable
information) encrypted with a symmetric cipher in CBC mode, next to the
Paillier encryption of the weight M^i of the chosen candidate i.

The tally multiplies all weight ciphertexts, so only the aggregate is ever
decrypted. Decrypting a single ballot is supported for auditing purposes.
"""

import collections
from cryptovote import aes
from cryptovote import des
from cryptovote import paillier
from cryptovote import weights as _weights
from cryptovote.errors import InvalidArgumentError

CIPHERS = {'aes': aes, 'des': des}

EncryptedBallot = collections.namedtuple('EncryptedBallot', ['pii', 'weight'])
EncryptedBallot.__doc__ = 'Ballot with symmetric CBC message pii and Paillier ciphertext weight.'


def get_cipher(name):
    """Return the symmetric cipher module for name, 'aes' or 'des'."""
    try:
        return CIPHERS[name]
    except KeyError:
        raise InvalidArgumentError(f'unknown cipher {name!r}') from None


def cast_ballot(pii, candidate, weights, public_key, cipher, sym_key, rng):
    """Encrypt PII and the weight of a vote for candidate."""
    w = _weights.vote_weight(candidate, weights)
    return EncryptedBallot(get_cipher(cipher).encrypt(pii, sym_key, rng),
                           paillier.encrypt(public_key, w, rng))


def tally(ballots, public_key):
    """Return the homomorphic sum of all weight ciphertexts, or None if there are no ballots."""
    ballots = list(ballots)
    if not ballots:
        return None

    return paillier.sum_ciphertexts(public_key, (b.weight for b in ballots))


def decrypt_ballot(ballot, private_key, cipher, sym_key):
    """Return decrypted PII (str) and plaintext weight of a single ballot."""
    pii = get_cipher(cipher).decrypt(ballot.pii, sym_key).decode('utf-8')
    return pii, paillier.decrypt(private_key, ballot.weight)


def to_json(ballot):
    """Serializable form of ballot, with hex strings."""
    return {'pii': ballot.pii.hex(), 'weight': paillier.to_hex(ballot.weight)}


def from_json(obj):
    """Ballot from its serializable form."""
    try:
        pii = bytes.fromhex(obj['pii'])
    except (KeyError, TypeError, ValueError):
        raise InvalidArgumentError('malformed ballot PII') from None

    try:
        weight = obj['weight']
    except (KeyError, TypeError):
        raise InvalidArgumentError('malformed ballot weight') from None

    return EncryptedBallot(pii, paillier.from_hex(weight))
