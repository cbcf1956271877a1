"""ElGamal cryptosystem over the groups of secsanta.fingroups.

A key pair consists of a private key x and a public key h=g^x, where g is the
generator of the group. A message M (a group element) is encrypted under h with
randomness u as the ciphertext c = (g^u, h^u M).

For the Secret Santa protocol only encryptions of the identity element 1 are used,
for which raising both components of a ciphertext to a power y yields another
encryption of 1 under the same public key. In general, decrypting (A^y, B^y)
gives M^y, where M is the decryption of (A, B).

All randomness is taken from an rng object with methods randrange() and shuffle(),
by default secrets.SystemRandom(). A seeded random.Random() can be passed instead
for reproducible test runs.
"""

import os
import logging
import secrets
from collections import namedtuple
from dataclasses import dataclass, field
from secsanta import fingroups
from secsanta.gmpy import powmod

_sysrandom = secrets.SystemRandom()


class CryptoFailure(Exception):
    """A cryptographic primitive could not complete."""


def default_rng(rng=None):
    """Return rng if given, otherwise the system's cryptographically secure rng."""
    return _sysrandom if rng is None else rng


def generate_group(l=None):
    """Create group of quadratic residues for a safe prime modulus of bit length l.

    Default bit length set by SecSanta option -L (2048, giving RFC 7919 group ffdhe2048).
    """
    if l is None:
        l = int(os.getenv('SECSANTA_BITLENGTH', '2048'))
    try:
        group = fingroups.QuadraticResidues(l=l)
    except ValueError as exc:
        raise CryptoFailure(f'group generation failed for bit length {l}') from exc

    logging.debug(f'Using group {group.__name__[:24]}... of order {group.order.bit_length()} bits')
    return group


def modpow(base, exponent, modulus):
    """Return (base**exponent) mod modulus as a Python int."""
    try:
        return int(powmod(base, exponent, modulus))
    except (ValueError, ZeroDivisionError) as exc:
        raise CryptoFailure(f'modular exponentiation failed: {exc}') from exc


@dataclass(frozen=True)
class KeyPair:
    """ElGamal key pair with private key x and public key h=g^x."""

    x: int = field(repr=False)
    h: fingroups.FiniteGroupElement


def keygen(group, rng=None):
    """ElGamal key generation, x uniformly random with g^x different from 1."""
    rng = default_rng(rng)
    n = group.order
    if not n or n < 2:
        raise CryptoFailure('group of order at least 2 required')

    g = group.generator
    while True:
        x = rng.randrange(n)
        h = g^x
        if h != group.identity:
            # NB: this branch will always be followed unless n is artificially small
            return KeyPair(x, h)


Ciphertext = namedtuple('Ciphertext', ('c1', 'c2'))
Ciphertext.__doc__ = 'ElGamal ciphertext (c1, c2) = (g^u, h^u M).'


def encrypt(h, M, u=None, rng=None):
    """ElGamal encryption of M under public key h, using randomness u (if given)."""
    group = type(h)
    if u is None:
        u = default_rng(rng).randrange(group.order)
    g = group.generator
    return Ciphertext(g^u, (h^u) @ M)


def encrypt_with_randomness(h, u):
    """ElGamal encryption of the identity under h using randomness u, giving (g^u, h^u).

    For u=1, the ciphertext is simply (g, h).
    """
    group = type(h)
    return encrypt(h, group.identity, u)


def decrypt(x, c):
    """ElGamal decryption of c=(A, B) using private key x, giving B A^-x."""
    A, B = c
    return (A^-x) @ B


def rerandomize(c, y):
    """Raise both components of ciphertext c to the power y.

    Only a proper rerandomization if c encrypts the identity.
    """
    A, B = c
    return Ciphertext(A^y, B^y)
