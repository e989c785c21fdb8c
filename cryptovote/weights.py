"""Base-M positional encoding of vote counts.

With M = max_voters + 1, a vote for candidate i is encoded as the weight M^i.
Summing the weights of all ballots gives the total

    c_0 M^0 + c_1 M^1 + ... + c_{k-1} M^{k-1},

from which each count c_i is recovered by repeated division with remainder
by M, provided that every c_i < M. A count reaching M carries into the next
candidate's digit, which cannot be detected in general. Only a carry out of
the last candidate's digit is detected by decode().
"""

from cryptovote.errors import InvalidArgumentError


def calc_weights(num_candidates, max_voters):
    """Return weights [M^0, M^1, ..., M^(num_candidates-1)] for M = max_voters + 1."""
    if num_candidates <= 0:
        raise InvalidArgumentError('number of candidates must be positive')

    if max_voters < 0:
        raise InvalidArgumentError('maximum number of voters must be nonnegative')

    M = max_voters + 1
    weights = [1]
    for _ in range(num_candidates - 1):
        weights.append(weights[-1] * M)
    return weights


def vote_weight(candidate, weights):
    """Return the weight of a vote for the given candidate index."""
    if not 0 <= candidate < len(weights):
        raise InvalidArgumentError(f'candidate index {candidate} out of range')

    return weights[candidate]


def encode(counts, M):
    """Return the total sum(c_i M^i) for the given counts, each 0 <= c_i < M."""
    total = 0
    for c in reversed(counts):
        if not 0 <= c < M:
            raise InvalidArgumentError(f'count {c} out of range [0, {M})')

        total = total * M + c
    return total


def decode(total, num_candidates, M):
    """Return the list of num_candidates counts encoded in total, base M."""
    if M < 1:
        raise InvalidArgumentError('base M must be positive')

    counts = []
    for _ in range(num_candidates):
        total, c = divmod(total, M)
        counts.append(c)
    if total:
        raise InvalidArgumentError('total exceeds the range of the encoding')

    return counts
