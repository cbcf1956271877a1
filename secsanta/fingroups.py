"""This module supports finite cyclic groups modulo a prime.

A finite group is a set of group elements together with a group operation.
All groups in this module are written multiplicatively.

The default Python operators to manipulate group elements are the (binary)
operator @ for the group operation, the (unary) operator ~ for inversion of
group elements, and the (binary) operator ^ for repeated application of
the group operation. The alternative Python operators for multiplicative
notation are:

    - default:         a @ b,    ~a,    a^n    (a^-1 = ~a)
    - multiplicative:  a * b,   1/a,    a**n   (a**-1 = 1/a)

for arbitrary group elements a, b, and integer n.

Two types of groups are supported, both prime-order subgroups of Z_p^*:

    - quadratic residue groups modulo a safe prime p=2q+1
    - the finite field Diffie-Hellman groups ffdhe2048, ..., ffdhe8192 of RFC 7919

Every group type comes with attributes modulus (p), order (q), generator (g),
and identity. Group types are created once per parameter set and shared.
"""

import math
import decimal
import functools
from secsanta.gmpy import powmod, is_prime, prev_prime, legendre


class FiniteGroupElement:
    """Abstract base class for finite groups.

    Overview Python operators for group operation, inverse, and repeated operation:

        - default notation: @, ~, ^ (matmul, invert, xor).
        - multiplicative notation: *, 1/ (or, **-1), ** (mul, truediv (or, pow), pow)
    """

    __slots__ = 'value'
    value: object  # for detection by pylint

    order = None
    identity = None
    generator = None  # generates the entire group

    def __matmul__(self, other):  # overload @
        group = type(self)
        if self is other:
            return group.operation2(self)

        if isinstance(other, group):
            return group.operation(self, other)

        return NotImplemented

    def __invert__(self):  # overload ~
        group = type(self)
        return group.inversion(self)

    def __xor__(self, other):  # overload ^
        if isinstance(other, int):
            group = type(self)
            return group.repeat(self, other)

        return NotImplemented

    def __mul__(self, other):
        group = type(self)
        return group.__matmul__(self, other)

    def __truediv__(self, other):
        group = type(self)
        if not isinstance(other, group):
            return NotImplemented

        return group.__matmul__(self, group.__invert__(other))

    def __rtruediv__(self, other):
        group = type(self)
        if other != 1:
            raise TypeError('only 1/. supported')

        return group.__invert__(self)

    def __pow__(self, other):
        group = type(self)
        return group.__xor__(self, other)

    def __eq__(self, other):
        group = type(self)
        if not isinstance(other, group):
            return NotImplemented

        return group.equality(self, other)

    def __hash__(self):
        """Make finite group elements hashable (e.g., for use as dict keys)."""
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return repr(self.value)

    @classmethod
    def operation(cls, a, b, /):
        """Return a @ b."""
        raise NotImplementedError

    @classmethod
    def operation2(cls, a, /):
        """Return a @ a."""
        return cls.operation(a, a)

    @classmethod
    def inversion(cls, a, /):
        """Return @-inverse of a (written ~a)."""
        raise NotImplementedError

    @classmethod
    def equality(cls, a, b, /):
        """Return a == b."""
        raise NotImplementedError

    @classmethod
    def repeat(cls, a, n):
        """Return nth @-power of a (written a^n), for any integer n."""
        raise NotImplementedError


class QuadraticResidue(FiniteGroupElement):
    """Common base class for groups of quadratic residues modulo a safe prime.

    For safe prime p=2q+1, the quadratic residues modulo p form the subgroup
    of Z_p^* of prime order q. Group elements are represented by Python ints
    in the range 1..p-1.
    """

    __slots__ = ()

    modulus: int

    def __init__(self, value=1, check=True):
        if check:
            if not isinstance(value, int):
                raise TypeError('int required')

            value %= self.modulus
            if value == 0 or legendre(value, self.modulus) != 1:
                raise ValueError('quadratic residue required')

        self.value = value

    @classmethod
    def operation(cls, a, b, /):
        return cls(a.value * b.value % cls.modulus, check=False)

    @classmethod
    def inversion(cls, a, /):
        return cls(int(powmod(a.value, -1, cls.modulus)), check=False)

    @classmethod
    def equality(cls, a, b, /):
        return a.value == b.value

    @classmethod
    def repeat(cls, a, n):
        return cls(int(powmod(a.value, n % cls.order, cls.modulus)), check=False)

    def __int__(self):
        return self.value


# RFC 7919, Appendix A: offsets X for p = 2^l - 2^(l-64) + (floor(2^(l-130) e) + X) 2^64 - 1.
FFDHE_OFFSETS = {2048: 560316, 3072: 2625351, 4096: 5736041, 6144: 15705020, 8192: 10965728}


@functools.cache
def _ffdhe_prime(l):
    """Compute the safe prime p of RFC 7919 group ffdhe<l>."""
    X = FFDHE_OFFSETS[l]
    with decimal.localcontext() as ctx:
        ctx.prec = round(l / math.log2(10)) + 10  # enough digits for floor(2^(l-130) e)
        e = decimal.Decimal(1)
        t = decimal.Decimal(1)
        k = 1
        while True:
            t /= k
            if e + t == e:
                break

            e += t
            k += 1
        epi = math.floor(e * 2**(l - 130)) + X
    return 2**l - 2**(l - 64) + epi * 2**64 - 1


@functools.cache
def _find_safe_prime(l):
    """Find safe prime p of bit length l, l>=3.

    Hence, q=(p-1)/2 is also prime. RFC 7919 primes are used for the bit lengths
    listed in FFDHE_OFFSETS. Otherwise, p is the largest safe prime below 2^l.
    """
    if l in FFDHE_OFFSETS:
        return _ffdhe_prime(l)

    if l < 3:
        raise ValueError('bit length l>=3 required')

    q = prev_prime(1 << l-1)
    while not is_prime(2*q+1):
        q = prev_prime(q)
    # q is a Sophie Germain prime
    return int(2*q + 1)


def QuadraticResidues(p=None, l=None):
    """Create type for quadratic residues group given (bit length l of) safe prime modulus p.

    The group of quadratic residues modulo p is of odd prime order q=(p-1)/2.
    """
    if p is None:
        if l is None:
            l = 2048
        p = _find_safe_prime(l)
    if p < 5 or p%2 == 0 or not is_prime(p) or not is_prime((p-1) // 2):
        raise ValueError('safe prime modulus p>=5 required')

    return _QuadraticResidues(int(p))


@functools.cache
def _QuadraticResidues(p):
    g = 2
    while legendre(g, p) != 1:
        g += 1
    # g generates the quadratic residues because p is a safe prime

    l = p.bit_length()
    name = f'QR{l}({p})'
    QR = type(name, (QuadraticResidue,), {'__slots__': ()})
    QR.modulus = p
    QR.order = p >> 1
    QR.identity = QR(1, check=False)
    QR.generator = QR(g)
    globals()[name] = QR  # NB: exploit (almost?) unique name dynamic QR type
    return QR


def FFDHEGroup(l=2048):
    """Create type for RFC 7919 group ffdhe<l>, l in 2048, 3072, 4096, 6144, 8192.

    The group consists of the quadratic residues modulo the safe prime p,
    with generator 2.
    """
    if l not in FFDHE_OFFSETS:
        raise ValueError(f'ffdhe{l} not supported')

    return QuadraticResidues(_ffdhe_prime(l))
