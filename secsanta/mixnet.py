"""Mix-net for tokens, that is, ElGamal encryptions of 1 under the participants' public keys.

Initially, participant i contributes token (g, h_i), for her public key h_i.
Then every participant in turn performs a shuffle round: she permutes the list of tokens
uniformly at random, and raises all components of all tokens to the same private random
exponent y. After the rounds with exponents y_1, ..., y_N, every token is of the form
(g^s, h_i^s) with s = y_1 ... y_N, where the order of the tokens is the composition of
N independent random permutations.

The rounds are strictly sequential: round k+1 takes the complete output of round k.
"""

import logging
from secsanta.elgamal import CryptoFailure, default_rng, rerandomize


class TokenList:
    """Immutable list of tokens."""

    __slots__ = '_tokens'

    def __init__(self, tokens):
        self._tokens = tuple(tokens)

    def __len__(self):
        return len(self._tokens)

    def __getitem__(self, key):
        return self._tokens[key]

    def __iter__(self):
        return iter(self._tokens)

    def __eq__(self, other):
        if not isinstance(other, TokenList):
            return NotImplemented

        return self._tokens == other._tokens

    def __hash__(self):
        return hash(self._tokens)

    def __repr__(self):
        return f'TokenList({len(self)} tokens)'

    @property
    def shared_value(self):
        """Common first component g^s of all tokens."""
        if not self._tokens:
            raise CryptoFailure('no tokens')

        return self._tokens[0].c1


def initial_tokens(participants):
    """Return list of the participants' initial tokens (g, h_i), ordered by identity i."""
    participants = sorted(participants, key=lambda p: p.pid)
    return TokenList(p.initial_token() for p in participants)


def shuffle_round(tokens, rng=None):
    """Randomly permute tokens and raise all components to a common random power y.

    Exponent y is drawn uniformly from 1..q-1, for group order q. Exponent y=0 is
    excluded as it would map all tokens to (1, 1).
    """
    rng = default_rng(rng)
    group = type(tokens.shared_value)
    y = rng.randrange(1, group.order)
    t = list(tokens)
    rng.shuffle(t)
    return TokenList(rerandomize(c, y) for c in t)


def mix(tokens, participants, rng=None, shuffle_round=shuffle_round):
    """Perform shuffle rounds for all participants in order of their identities.

    Return the final list of tokens, to be broadcast to all participants.
    """
    n = len(tokens)
    for p in sorted(participants, key=lambda p: p.pid):
        tokens = shuffle_round(tokens, rng)
        if len(tokens) != n:
            raise CryptoFailure(f'round of participant {p.pid} output {len(tokens)} tokens, '
                                f'{n} expected')

        logging.debug(f'Shuffle round of participant {p.pid} done')
    return tokens
