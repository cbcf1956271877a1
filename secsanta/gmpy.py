"""This module collects all gmpy2 functions used by SecSanta.

All big-integer arithmetic for the protocol runs through gmpy2, in particular
modular exponentiation. A function for finding previous primes is also provided.
"""

import logging
from gmpy2 import version, is_prime, powmod, legendre

logging.debug(f'Load gmpy2 version {version()}')

__all__ = ['is_prime', 'prev_prime', 'powmod', 'legendre']


def prev_prime(x):
    """Return the greatest probable prime number < x, if any."""
    if x <= 2:
        raise ValueError('no smaller prime')

    if x == 3:
        return 2

    x -= 1 + x%2
    while not is_prime(x):
        x -= 2
    return x
