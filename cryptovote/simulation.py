"""Simulated election with a homomorphic Paillier tally.

The simulation generates a symmetric key and a Paillier key pair, casts the
requested number of ballots for random (or given) candidates, tallies all
ballots homomorphically, decrypts the tally, and decodes the count for each
candidate. The decoded counts are checked against the counts of the
simulated votes.

Ballots can be encrypted by a pool of worker threads, all sharing the
(internally synchronized) random source.
"""

import logging
import concurrent.futures
from cryptovote import ballots as _ballots
from cryptovote import paillier
from cryptovote import weights as _weights
from cryptovote.errors import InvalidArgumentError


def pii_string(i):
    """Simulated personally identifiable information of voter i."""
    return f'FName_{i} LName_{i}'


class SimulationResult:
    """Outcome of a simulated election."""

    __slots__ = ('num_candidates', 'max_voters', 'cipher', 'public_key', 'private_key',
                 'sym_key', 'weights', 'choices', 'actual_counts', 'ballots',
                 'encrypted_tally', 'total', 'counts')

    def __init__(self, **kwargs):
        for name in self.__slots__:
            setattr(self, name, kwargs[name])

    @property
    def M(self):
        return self.max_voters + 1

    @property
    def num_votes(self):
        return len(self.choices)

    @property
    def verified(self):
        """True if the decoded counts match the simulated votes.

        False also if the decrypted total could not be decoded, in which case
        counts is None.
        """
        if self.counts is None:
            return False

        return self.counts == self.actual_counts and sum(self.counts) == self.num_votes

    def decrypt_ballot(self, index):
        """Decrypt PII and weight of ballot with given index."""
        if not 0 <= index < len(self.ballots):
            raise InvalidArgumentError(f'ballot index {index} out of range')

        return _ballots.decrypt_ballot(self.ballots[index], self.private_key,
                                       self.cipher, self.sym_key)

    def to_json(self, include_ballots=False):
        """Serializable summary of the result; private keys are never included."""
        obj = {'candidates': self.num_candidates,
               'max_voters': self.max_voters,
               'M': self.M,
               'votes': self.num_votes,
               'cipher': self.cipher,
               'n': paillier.to_hex(self.public_key.n),
               'total': self.total,
               'counts': self.counts,
               'actual_counts': self.actual_counts,
               'verified': self.verified}
        if include_ballots:
            obj['ballots'] = [_ballots.to_json(b) for b in self.ballots]
        return obj


def simulate(num_candidates, max_voters, num_votes, rng, key_size=1024, cipher='aes',
             workers=0, choices=None):
    """Run a simulated election and return a SimulationResult.

    If choices is given, it lists the candidate index of each of the num_votes
    ballots. Otherwise, candidates are drawn uniformly at random.
    """
    if num_votes < 0:
        raise InvalidArgumentError('number of votes must be nonnegative')

    cipher_module = _ballots.get_cipher(cipher)
    weights = _weights.calc_weights(num_candidates, max_voters)
    M = max_voters + 1
    logging.info(f'Weights for {num_candidates} candidates computed using M={M}')
    if num_votes > max_voters:
        logging.warning(f'Number of votes {num_votes} exceeds max_voters={max_voters}: '
                        'counts may not decode correctly')

    if choices is None:
        choices = [rng.randbelow(num_candidates) for _ in range(num_votes)]
    else:
        choices = list(choices)
        if len(choices) != num_votes:
            raise InvalidArgumentError(f'{len(choices)} choices given for {num_votes} votes')

        for c in choices:
            _weights.vote_weight(c, weights)  # range check
    actual_counts = [0] * num_candidates
    for c in choices:
        actual_counts[c] += 1

    logging.info(f'Generate Paillier keys of {key_size} bits')
    public_key, private_key = paillier.generate_keypair(key_size, rng)
    if num_votes * weights[-1] >= public_key.n:
        raise InvalidArgumentError(f'Paillier modulus of {key_size} bits too small '
                                   f'for {num_votes} votes and {num_candidates} candidates')

    sym_key = cipher_module.generate_key(rng)
    logging.info(f'Generated {cipher.upper()} key')

    def cast(i):
        return _ballots.cast_ballot(pii_string(i), choices[i], weights, public_key,
                                    cipher, sym_key, rng)

    logging.info(f'Simulate and encrypt {num_votes} votes')
    if workers > 0:
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            ballots = list(executor.map(cast, range(num_votes)))
    else:
        ballots = [cast(i) for i in range(num_votes)]

    logging.info('Tally encrypted votes')
    encrypted_tally = _ballots.tally(ballots, public_key)
    if encrypted_tally is None:
        logging.info('No votes to tally')
        total = 0
    else:
        total = paillier.decrypt(private_key, encrypted_tally)
        logging.debug(f'Decrypted total {total}')
    try:
        counts = _weights.decode(total, num_candidates, M)
    except InvalidArgumentError as exc:
        logging.warning(f'Decrypted total {total} cannot be decoded: {exc}')
        counts = None

    return SimulationResult(num_candidates=num_candidates, max_voters=max_voters, cipher=cipher,
                            public_key=public_key, private_key=private_key, sym_key=sym_key,
                            weights=weights, choices=choices, actual_counts=actual_counts,
                            ballots=ballots, encrypted_tally=encrypted_tally, total=total,
                            counts=counts)
