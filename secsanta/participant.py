"""Participants in the Secret Santa protocol.

A participant goes through three states, represented by the state tags
Initialized, KeyGenerated, and Assigned. Key material exists only in the
latter two states, and a recipient exists only in the Assigned state.
Using a participant in the wrong state raises a RuntimeError.

The final step of the protocol is done by Participant.extract(). Given the
broadcast list of tokens, all of the form (g^s, h_i^s) for a common exponent s
accumulated over all shuffle rounds, the participant computes (g^s)^x for her
private key x. This value equals h^s for her own public key h=g^x, and therefore
occurs exactly once in the list, namely at the position where her own token
ended up. This position is her recipient.
"""

from dataclasses import dataclass
from secsanta.elgamal import CryptoFailure, KeyPair, keygen, encrypt_with_randomness


@dataclass(frozen=True)
class Initialized:
    """Participant without key material."""


@dataclass(frozen=True)
class KeyGenerated:
    """Participant holding an ElGamal key pair."""

    key: KeyPair


@dataclass(frozen=True)
class Assigned:
    """Participant holding a key pair and her recipient."""

    key: KeyPair
    recipient: int


class Participant:
    """Participant with identity pid, 1<=pid<=N."""

    __slots__ = ('pid', 'state')

    def __init__(self, pid):
        self.pid = pid
        self.state = Initialized()

    def __repr__(self):
        return f'<Participant {self.pid}: {type(self.state).__name__}>'

    def _require(self, *states):
        if not isinstance(self.state, states):
            expected = ' or '.join(s.__name__ for s in states)
            raise RuntimeError(f'participant {self.pid} is {type(self.state).__name__}, '
                               f'{expected} required')

    def generate_key(self, group, rng=None):
        """Generate key pair in given group and return the public key."""
        self._require(Initialized)
        key = keygen(group, rng)
        self.state = KeyGenerated(key)
        return key.h

    @property
    def public_key(self):
        self._require(KeyGenerated, Assigned)
        return self.state.key.h

    def initial_token(self):
        """Return encryption of 1 under own public key h with randomness 1, which is (g, h)."""
        self._require(KeyGenerated)
        return encrypt_with_randomness(self.state.key.h, 1)

    def extract(self, tokens):
        """Find own recipient from the final list of tokens.

        Return the recipient, that is, the 1-based position of own token.
        """
        self._require(KeyGenerated)
        if not len(tokens):
            raise CryptoFailure(f'participant {self.pid} received no tokens')

        key = self.state.key
        shared = tokens[0].c1  # NB: all c1 components are equal
        target = shared^key.x
        positions = [j for j, c in enumerate(tokens, start=1) if c.c2 == target]
        if len(positions) != 1:
            raise CryptoFailure(f'participant {self.pid} found {len(positions)} matching tokens')

        recipient = positions[0]
        self.state = Assigned(key, recipient)
        return recipient

    @property
    def recipient(self):
        """Whom this participant gives a present to."""
        self._require(Assigned)
        return self.state.recipient

    def forget(self):
        """Wipe key material and recipient, if any."""
        self.state = Initialized()
