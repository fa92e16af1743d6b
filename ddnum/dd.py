"""
Double-double floating-point numbers.

A ``DD`` holds an unevaluated sum ``hi + lo`` of two doubles giving about
106 bits of precision. Arithmetic results are normalized: ``lo`` is the
round-off of ``hi`` so that ``hi == hi + lo`` in double precision.

The module level functions operate on raw ``(hi, lo)`` float parts and
return tuples; the ``DD`` methods wrap them. Numeric edge cases never raise:
NaN and infinity follow IEEE-754 propagation.

Note: many additions and subtractions below look redundant. They are not
and must not be simplified; they rely on IEEE-754 rounding.
"""

import math
import numbers
from decimal import Decimal
from fractions import Fraction
from typing import Tuple

import numpy as np

from .extended import (
    fast_two_sum,
    get_scale,
    high_part,
    ieee_divide,
    ieee_pow,
    is_not_normal,
    two_diff,
    two_diff_low,
    two_pow,
    two_product,
    two_product_low,
    two_square,
    two_square_low,
    two_square_low_split,
    two_sum,
    two_sum_low,
    NO_SCALE,
)
from .field import NativeOperators


TWO_POW_512 = 2.0 ** 512
TWO_POW_M512 = 2.0 ** -512
HIGH32_MASK = ~0xFFFFFFFF

LONG_MIN = -(1 << 63)
LONG_MAX = (1 << 63) - 1
INT_MIN = -(1 << 31)
INT_MAX = (1 << 31) - 1

# Scaled power constants
LARGE_N = 100000000
SAFE_EXPONENT_F = 958
SAFE_F = 0.9999996907846553
SAFE_EXPONENT_2F = 1013
SAFE_2F = 1.0000003269678954
LN2 = 0.6931471805599453
ROOT_HALF = 0.7071067811865476
SAFE_MULTIPLY = 2.0 ** 500
SAFE_MULTIPLY_DOWNSCALE = 2.0 ** -500

Parts = Tuple[float, float]


# ---------------------------------------------------------------------------
# Arithmetic on (hi, lo) parts
# ---------------------------------------------------------------------------

def add_double(x: float, xx: float, y: float) -> Parts:
    """Sum of a double-double and a double."""
    s0 = x + y
    s1 = two_sum_low(x, y, s0)
    # A non-zero cancellation leaves s0 >= 1 ulp of x, larger than xx
    return fast_two_sum(s0, s1 + xx)


def add_parts(x: float, xx: float, y: float, yy: float) -> Parts:
    """
    Sum of two double-doubles.

    Args:
        x: High part of the first value
        xx: Low part of the first value
        y: High part of the second value
        yy: Low part of the second value

    Returns:
        Normalized (hi, lo) sum
    """
    s0 = x + y
    s1 = two_sum_low(x, y, s0)
    t0 = xx + yy
    t1 = two_sum_low(xx, yy, t0)
    z, zz = fast_two_sum(s0, s1 + t0)
    return fast_two_sum(z, zz + t1)


def accurate_add_double(x: float, xx: float, y: float) -> Parts:
    """
    Sum of a double-double and a double using an expansion.

    The three-term expansion ``(x, xx) + y`` is grown and compressed
    (Shewchuk) before the final reduction to two parts.
    """
    s, s2 = two_sum(xx, y)
    s0, s1 = two_sum(x, s)
    s, s2 = fast_two_sum(s1, s2)
    t0, t1 = fast_two_sum(s0, s)
    return fast_two_sum(t0, s2 + t1)


def accurate_add_parts(x: float, xx: float, y: float, yy: float) -> Parts:
    """
    Sum of two double-doubles using a four-term expansion.

    Args:
        x: High part of the first value
        xx: Low part of the first value
        y: High part of the second value
        yy: Low part of the second value

    Returns:
        Normalized (hi, lo) sum with about 1 eps^2 relative error
    """
    # Expansion sum: (x, xx) + (y, yy) -> (s0, s1, s2, s3)
    u, s3 = two_sum(xx, yy)
    s0, v = two_sum(x, u)
    u, s2 = two_sum(v, y)
    s0, s1 = two_sum(s0, u)
    # Compress (s0, s1, s2, s3) -> (s0, s1)
    s1, v = fast_two_sum(s1, s2)
    u, s3 = fast_two_sum(v, s3)
    v, s2 = fast_two_sum(s1, u)
    s0, s1 = fast_two_sum(s0, v)
    return fast_two_sum(s0, s3 + s2 + s1)


def multiply_double(x: float, xx: float, y: float) -> Parts:
    """Product of a double-double and a double (Dekker's mul2 with yy = 0)."""
    hi = x * y
    lo = two_product_low(x, y, hi)
    return fast_two_sum(hi, lo + xx * y)


def multiply_parts(x: float, xx: float, y: float, yy: float) -> Parts:
    """Product of two double-doubles (Dekker's mul2)."""
    hi = x * y
    lo = two_product_low(x, y, hi)
    return fast_two_sum(hi, lo + (x * yy + xx * y))


def square_parts(x: float, xx: float) -> Parts:
    """Square of a double-double."""
    hi = x * x
    lo = two_square_low(x, hi)
    return fast_two_sum(hi, lo + (2 * x * xx))


def _collect_quotient(q0: float, q1: float, q2: float) -> Parts:
    q, qq = fast_two_sum(q0, q1)
    return two_sum(q, qq + q2)


def divide_double(x: float, xx: float, y: float) -> Parts:
    """
    Quotient of a double-double and a double by long division.

    When the leading quotient digit is not a normal number (zero, sub-normal,
    infinite or NaN) it is returned with a zero low part.
    """
    q0 = ieee_divide(x, y)
    if is_not_normal(q0):
        return q0, 0.0
    # Remainder r0 = x - q0 * y requires the high accuracy sum
    p0, p1 = two_product(y, q0)
    r0, r1 = accurate_add_parts(x, xx, -p0, -p1)
    q1 = r0 / y
    p0, p1 = two_product(y, q1)
    r0, r1 = add_parts(r0, r1, -p0, -p1)
    q2 = r0 / y
    return _collect_quotient(q0, q1, q2)


def divide_parts(x: float, xx: float, y: float, yy: float) -> Parts:
    """Quotient of two double-doubles by long division."""
    q0 = ieee_divide(x, y)
    if is_not_normal(q0):
        return q0, 0.0
    p0, p1 = multiply_double(y, yy, q0)
    r0, r1 = accurate_add_parts(x, xx, -p0, -p1)
    q1 = r0 / y
    p0, p1 = multiply_double(y, yy, q1)
    r0, r1 = add_parts(r0, r1, -p0, -p1)
    q2 = r0 / y
    return _collect_quotient(q0, q1, q2)


def reciprocal_parts(y: float, yy: float) -> Parts:
    """Reciprocal of a double-double; long division of (1, 0)."""
    q0 = ieee_divide(1.0, y)
    if is_not_normal(q0):
        return q0, 0.0
    p0, p1 = multiply_double(y, yy, q0)
    r0, r1 = accurate_add_double(-p0, -p1, 1.0)
    q1 = r0 / y
    p0, p1 = multiply_double(y, yy, q1)
    r0, r1 = add_parts(r0, r1, -p0, -p1)
    q2 = r0 / y
    return _collect_quotient(q0, q1, q2)


def sqrt_parts(x: float, xx: float) -> Parts:
    """
    Square root of a double-double (Dekker's sqrt2).

    Negative and NaN arguments return (NaN, 0); zero, sub-normal and
    infinite roots are returned unchanged with a zero low part.
    """
    c = math.sqrt(x) if x >= 0 else math.nan
    if is_not_normal(c):
        return c, 0.0
    hc = high_part(c)
    lc = c - hc
    u = c * c
    uu = two_square_low_split(hc, lc, u)
    cc = (x - u - uu + xx) * 0.5 / c
    return fast_two_sum(c, cc)


def scalb_parts(x: float, xx: float, exp: int) -> Parts:
    """
    Multiply a double-double by ``2^exp``.

    The scaling is exact unless the result is sub-normal. Large exponents
    are applied as multiples of 2^512 in at most five multiplications.
    """
    if -1022 <= exp <= 1023:
        s = two_pow(exp)
        return x * s, xx * s

    if exp < 0:
        n = (-exp) >> 9
        m = -((-exp) & 511)
        p = TWO_POW_M512
    else:
        n = exp >> 9
        m = exp & 511
        p = TWO_POW_512

    if n >= 5:
        # Certain over/underflow. Avoid infinity as a factor: 0 * inf is NaN.
        p *= p * 0.5
        return x * p * p * p, xx * p * p * p

    s = two_pow(m)
    z0 = x * s
    z1 = xx * s
    for _ in range(n):
        z0 *= p
        z1 *= p
    return z0, z1


def frexp_parts(x: float, xx: float) -> Tuple[Parts, int]:
    """
    Decompose a double-double into a fraction in [0.5, 1) and an exponent.

    Zero, infinite and NaN values are returned unchanged with exponent 0.
    The fraction magnitude can be 1 when the high part is a power of two
    and the low part has the opposite sign: ``(1, -eps)`` is preferred over
    ``(0.5, -eps/2)`` to keep the high part in [0.5, 1].

    Returns:
        Tuple of ((hi, lo) fraction, exponent)
    """
    exp = get_scale(x)
    if exp == NO_SCALE:
        return (x, xx), 0
    exp += 1
    f0, f1 = scalb_parts(x, xx, -exp)
    if abs(f0) == 0.5 and 2 * f0 * f1 < 0:
        f0 *= 2
        f1 *= 2
        exp -= 1
    return (f0, f1), exp


def _floor(v: float) -> float:
    return float(np.floor(v))


def _ceil(v: float) -> float:
    return float(np.ceil(v))


def _floor_or_ceil(x: float, xx: float, op) -> Parts:
    y = op(x)
    if y == x:
        if is_not_normal(y):
            return y, 0.0
        # High part is an integer, round the low part.
        # Adding 0.0 maps -0.0 to 0.0 so the round-off is never -0.0.
        yy = op(xx) + 0.0
        return fast_two_sum(y, yy)
    # NaN, or the rounding is decided by the high part
    return y, 0.0


# ---------------------------------------------------------------------------
# Powers
# ---------------------------------------------------------------------------

def _compute_simple_pow(x: float, xx: float, n: int) -> Parts:
    """
    Power of a finite non-zero double-double for ``n > 0``.

    Uses ``(x + xx)^n = x^n * (1 + z)^n`` with ``z = xx / x`` and a
    correction ``w = (1 + z)^n - 1`` from a Taylor series or
    ``expm1(n * log1p(z))`` for large ``n`` (van Mulbregt).
    """
    y = ieee_pow(x, n)
    if not math.isfinite(y):
        return y, 0.0
    z = xx / x
    if n > LARGE_N:
        w = math.expm1(n * math.log1p(z))
    else:
        w = n * z * (1 + (n - 1) * z * 0.5)
    return fast_two_sum(y, y * w)


def simple_pow_parts(x: float, xx: float, n: int) -> Parts:
    """
    Integer power of a double-double.

    Args:
        x: High part
        xx: Low part
        n: Exponent

    Returns:
        (hi, lo) power; ``n == 0`` returns (1, 0) for any input
    """
    if n == 0:
        return 1.0, 0.0
    if not math.isfinite(x) or x == 0:
        return ieee_pow(x, n), 0.0
    if n < 0:
        r0, r1 = _compute_simple_pow(x, xx, -n)
        # Safe inversion of extreme values: 1 / x = b * (1 / bx)
        if abs(r0) < SAFE_MULTIPLY_DOWNSCALE:
            r0, r1 = reciprocal_parts(r0 * SAFE_MULTIPLY, r1 * SAFE_MULTIPLY)
            hi = r0 * SAFE_MULTIPLY
            lo = r1 * (0.0 if math.isinf(hi) else SAFE_MULTIPLY)
            return hi, lo
        if abs(r0) > SAFE_MULTIPLY:
            r0, r1 = reciprocal_parts(r0 * SAFE_MULTIPLY_DOWNSCALE, r1 * SAFE_MULTIPLY_DOWNSCALE)
            return r0 * SAFE_MULTIPLY_DOWNSCALE, r1 * SAFE_MULTIPLY_DOWNSCALE
        return reciprocal_parts(r0, r1)
    return _compute_simple_pow(x, xx, n)


def _compute_simple_pow_scaled(bx: int, x: float, xx: float, n: int) -> Tuple[Parts, int]:
    """
    Scaled power of a fraction ``(x, xx)`` in [0.5, 1] with exponent ``bx``.

    ``(f * 2^b)^n = 2^(b*n) * f^n``. When ``f^n`` would over/underflow the
    power is decomposed as ``f^n = (f^m)^(n // m) * f^(n % m)`` with ``m`` the
    largest safe exponent, recursing on the quotient power.
    """
    b = bx
    f0 = x
    f1 = xx
    # Use f (<= 1) or 2f (>= 1) as the fraction, whichever allows the larger
    # exponent. The switch-over is taken at f = 1/sqrt(2).
    af = abs(f0)
    if af < ROOT_HALF:
        f0 *= 2
        f1 *= 2
        af *= 2
        b -= 1
        if n <= SAFE_EXPONENT_2F or af <= SAFE_2F:
            m = n
        else:
            # (2f)^m < 2^1013
            m = max(SAFE_EXPONENT_2F, int(SAFE_EXPONENT_2F * LN2 / math.log(af)))
    else:
        if n <= SAFE_EXPONENT_F or af >= SAFE_F:
            m = n
        else:
            # f^m > 2^-958
            m = max(SAFE_EXPONENT_F, int(-SAFE_EXPONENT_F * LN2 / math.log(af)))

    if n <= m:
        f, e = frexp_parts(*_compute_simple_pow(f0, f1, n))
        return f, b * n + e

    q, r = divmod(n, m)
    (g0, g1), qb = frexp_parts(*_compute_simple_pow(f0, f1, m))
    if q > 1:
        (g0, g1), qb = _compute_simple_pow_scaled(qb, g0, g1, q)

    if r == 0:
        f, e = frexp_parts(g0, g1)
        return f, b * n + qb + e
    if r == 1:
        f, e = frexp_parts(*multiply_parts(g0, g1, f0, f1))
        return f, b * n + qb + e

    (h0, h1), rb = frexp_parts(*_compute_simple_pow(f0, f1, r))
    f, e = frexp_parts(*multiply_parts(h0, h1, g0, g1))
    return f, b * n + qb + rb + e


def simple_pow_scaled_parts(x: float, xx: float, n: int) -> Tuple[Parts, int]:
    """
    Integer power returned as a fraction in [0.5, 1) and a binary exponent.

    Args:
        x: High part
        xx: Low part
        n: Exponent

    Returns:
        Tuple of ((hi, lo) fraction, exponent). ``n == 0`` returns
        ((0.5, 0), 1); zero and non-finite values return the IEEE power
        with exponent 0.
    """
    if n == 0:
        return (0.5, 0.0), 1
    if not math.isfinite(x) or x == 0:
        return (ieee_pow(x, n), 0.0), 0
    (f0, f1), b = frexp_parts(x, xx)
    if n < 0:
        (f0, f1), e = _compute_simple_pow_scaled(b, f0, f1, -n)
        # Non-zero fraction so inversion is safe
        f, ie = frexp_parts(*reciprocal_parts(f0, f1))
        return f, ie - e
    return _compute_simple_pow_scaled(b, f0, f1, n)


# ---------------------------------------------------------------------------
# Value type
# ---------------------------------------------------------------------------

def _same_bits(a: float, b: float) -> bool:
    # +0.0 and -0.0 differ; all NaNs are equal
    if a != a:
        return b != b
    return a == b and math.copysign(1.0, a) == math.copysign(1.0, b)


def _bits_key(a: float):
    if a != a:
        return None
    return a, math.copysign(1.0, a)


class DD(NativeOperators):
    """
    Immutable double-double number ``hi + lo``.

    Instances are created with the factory methods (``DD.of``,
    ``DD.from_value``, ``DD.of_sum``, ...). Arithmetic methods accept a
    ``DD`` or a real number and return a new normalized ``DD``. Python
    operators are supported with ``DD`` or real operands on either side.

    Equality is component-wise on the bit patterns: ``+0.0`` and ``-0.0``
    differ and all NaN values are equal. Ordering is numeric.

    Attributes:
        hi: High part (the value rounded to a double)
        lo: Low part (the round-off)
    """

    __slots__ = ("_x", "_xx")

    # numpy operators defer to the DD reflected operators
    __array_ufunc__ = None

    ZERO = None  # type: DD
    ONE = None  # type: DD

    def __init__(self, x: float, xx: float = 0.0):
        object.__setattr__(self, "_x", x)
        object.__setattr__(self, "_xx", xx)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return type(self), (self._x, self._xx)

    # Construction

    @classmethod
    def of(cls, x, xx=None) -> "DD":
        """
        Create a double-double.

        With one argument an integer is converted exactly (a 64-bit integer
        is split into two 32-bit halves) and a real number becomes
        ``(x, 0)``. With two arguments the parts are used unchanged; the
        caller is responsible for passing a normalized pair.

        Args:
            x: Value, or the high part when ``xx`` is given
            xx: Optional low part

        Returns:
            Double-double value
        """
        if xx is not None:
            return cls(float(x), float(xx))
        if isinstance(x, numbers.Integral) and not isinstance(x, bool):
            x = int(x)
            if LONG_MIN <= x <= LONG_MAX:
                a = x & HIGH32_MASK
                return cls(*fast_two_sum(float(a), float(x - a)))
            return cls.from_value(x)
        return cls(float(x), 0.0)

    @classmethod
    def from_value(cls, value) -> "DD":
        """
        Closest double-double to an exact value.

        Accepts decimal strings, ``Decimal``, ``Fraction`` and integers.
        The high part is the correctly rounded value and the low part the
        rounded remainder. Values beyond the double range give an infinite
        high part with a zero low part.

        Args:
            value: Exact value

        Returns:
            Double-double value

        Raises:
            decimal.InvalidOperation: If a string is not a valid number
        """
        if isinstance(value, float):
            return cls(value, 0.0)
        if isinstance(value, str):
            value = Decimal(value.strip())
        if isinstance(value, Decimal) and not value.is_finite():
            return cls(float(value), 0.0)
        exact = Fraction(value)
        try:
            z = float(exact)
        except OverflowError:
            return cls(math.inf if exact > 0 else -math.inf, 0.0)
        return cls(z, float(exact - Fraction(z)))

    @classmethod
    def of_sum(cls, x: float, y: float) -> "DD":
        """Exact sum of two doubles."""
        return cls(*two_sum(x, y))

    @classmethod
    def of_difference(cls, x: float, y: float) -> "DD":
        """Exact difference of two doubles."""
        return cls(*two_diff(x, y))

    @classmethod
    def of_product(cls, x: float, y: float) -> "DD":
        """Exact product of two doubles (no over/underflow protection)."""
        return cls(*two_product(x, y))

    @classmethod
    def of_square(cls, x: float) -> "DD":
        """Exact square of a double (no over/underflow protection)."""
        return cls(*two_square(x))

    @classmethod
    def from_quotient(cls, x: float, y: float) -> "DD":
        """
        Closest double-double to the quotient of two doubles.

        Args:
            x: Dividend
            y: Divisor

        Returns:
            Quotient; a non-normal leading digit has a zero low part
        """
        q0 = ieee_divide(x, y)
        if is_not_normal(q0):
            return cls(q0, 0.0)
        p0 = q0 * y
        p1 = two_product_low(q0, y, p0)
        r0 = x - p0
        r1 = two_diff_low(x, p0, r0) - p1
        return cls(q0, (r0 + r1) / y)

    # Properties

    @property
    def hi(self) -> float:
        return self._x

    @property
    def lo(self) -> float:
        return self._xx

    def is_finite(self) -> bool:
        """Return True if the sum of the parts is finite."""
        return math.isfinite(self._x + self._xx)

    # Conversions

    def double_value(self) -> float:
        """Value rounded to a double."""
        return self._x + self._xx

    def __float__(self) -> float:
        return self._x + self._xx

    def long_value(self) -> int:
        """
        Value truncated towards zero and clipped to a signed 64-bit range.

        NaN converts to 0 and infinities to the range limits.
        """
        x = self._x
        if x != x:
            return 0
        if math.isinf(x):
            return LONG_MAX if x > 0 else LONG_MIN
        exact = Fraction(x)
        if math.isfinite(self._xx):
            exact += Fraction(self._xx)
        return max(LONG_MIN, min(LONG_MAX, int(exact)))

    def int_value(self) -> int:
        """Value truncated towards zero and clipped to a signed 32-bit range."""
        return max(INT_MIN, min(INT_MAX, self.long_value()))

    def __int__(self) -> int:
        return self.long_value()

    def to_fraction(self) -> Fraction:
        """
        Exact value as a fraction.

        Raises:
            ValueError: If the value is not finite
        """
        if not (math.isfinite(self._x) and math.isfinite(self._xx)):
            raise ValueError(f"Cannot convert non-finite value to a fraction: {self}")
        return Fraction(self._x) + Fraction(self._xx)

    # Arithmetic

    def negate(self) -> "DD":
        return DD(-self._x, -self._xx)

    def abs(self) -> "DD":
        """Absolute value; both signed zeros return ``ZERO``."""
        if self._x < 0:
            return self.negate()
        return DD.ZERO if self._x == 0 else self

    def floor(self) -> "DD":
        """Largest integer not above the value."""
        return DD(*_floor_or_ceil(self._x, self._xx, _floor))

    def ceil(self) -> "DD":
        """Smallest integer not below the value."""
        return DD(*_floor_or_ceil(self._x, self._xx, _ceil))

    def add(self, y) -> "DD":
        """
        Sum with a double-double (about 4 eps^2) or a double (about 2 eps^2).

        Args:
            y: Value to add

        Returns:
            Normalized sum
        """
        if isinstance(y, DD):
            return DD(*add_parts(self._x, self._xx, y._x, y._xx))
        return DD(*add_double(self._x, self._xx, float(y)))

    def subtract(self, y) -> "DD":
        """Difference with a double-double or a double."""
        if isinstance(y, DD):
            return DD(*add_parts(self._x, self._xx, -y._x, -y._xx))
        return DD(*add_double(self._x, self._xx, -float(y)))

    def multiply(self, y) -> "DD":
        """
        Product with a double-double (about 4 eps^2) or a double.

        No over/underflow protection is applied to the Dekker split.
        """
        if isinstance(y, DD):
            return DD(*multiply_parts(self._x, self._xx, y._x, y._xx))
        return DD(*multiply_double(self._x, self._xx, float(y)))

    def multiply_int(self, n: int) -> "DD":
        if abs(n) <= 1 << 53:
            return DD(*multiply_double(self._x, self._xx, float(n)))
        return self.multiply(DD.of(n))

    def square(self) -> "DD":
        return DD(*square_parts(self._x, self._xx))

    def divide(self, y) -> "DD":
        """
        Quotient with a double-double or a double.

        A zero divisor produces an IEEE infinity or NaN.
        """
        if isinstance(y, DD):
            return DD(*divide_parts(self._x, self._xx, y._x, y._xx))
        return DD(*divide_double(self._x, self._xx, float(y)))

    def reciprocal(self) -> "DD":
        return DD(*reciprocal_parts(self._x, self._xx))

    def sqrt(self) -> "DD":
        """
        Square root.

        Negative and NaN values return (NaN, 0), +infinity returns
        (inf, 0) and a signed zero returns itself.
        """
        return DD(*sqrt_parts(self._x, self._xx))

    def scalb(self, exp: int) -> "DD":
        """Multiply by ``2^exp``; exact unless the result is sub-normal."""
        return DD(*scalb_parts(self._x, self._xx, exp))

    def frexp(self) -> Tuple["DD", int]:
        """
        Decompose into a fraction and a binary exponent.

        The fraction ``f`` has a high part with magnitude in [0.5, 1] and
        ``f.scalb(exp)`` reconstructs this value.

        Returns:
            Tuple of (fraction, exponent)
        """
        f, exp = frexp_parts(self._x, self._xx)
        return DD(*f), exp

    def pow(self, n: int) -> "DD":
        """
        Integer power.

        ``x^0`` is one for every value including NaN and infinity. Zero and
        non-finite values follow the IEEE-754 power function. Negative
        powers invert the positive power with safe scaling of extreme
        intermediates.

        Args:
            n: Exponent

        Returns:
            Power
        """
        if n == 1:
            return self
        return DD(*simple_pow_parts(self._x, self._xx, n))

    def pow_scaled(self, n: int) -> Tuple["DD", int]:
        """
        Integer power as a fraction in [0.5, 1) and a binary exponent.

        The result ``f * 2^exp`` may lie far outside the double range.

        Args:
            n: Exponent

        Returns:
            Tuple of (fraction, exponent)
        """
        x = self._x
        if n != 0 and math.isfinite(x) and x != 0:
            (f0, f1), b = frexp_parts(x, self._xx)
            if abs(f0) == 0.5 and f1 == 0:
                # Exact power of 2: (f * 2^b)^n = (2f)^n * 2^((b-1)n)
                y0 = 0.5 * ieee_pow(2 * f0, n)
                y1 = math.copysign(0.0, y0 * f0 * self._xx)
                return DD(y0, y1), 1 + (b - 1) * n
        f, exp = simple_pow_scaled_parts(x, self._xx, n)
        return DD(*f), exp

    # Field

    def zero(self) -> "DD":
        return DD.ZERO

    def one(self) -> "DD":
        return DD.ONE

    def is_zero(self) -> bool:
        return self._x == 0.0

    def is_one(self) -> bool:
        return self._x == 1.0 and self._xx == 0.0

    # Python protocol

    def __eq__(self, other):
        if self is other:
            return True
        if isinstance(other, DD):
            return _same_bits(self._x, other._x) and _same_bits(self._xx, other._xx)
        return NotImplemented

    def __hash__(self):
        return hash((_bits_key(self._x), _bits_key(self._xx)))

    def _compare_parts(self, other):
        if isinstance(other, DD):
            return other._x, other._xx
        if isinstance(other, numbers.Real):
            o = DD.of(other)
            return o._x, o._xx
        return None

    def __lt__(self, other):
        o = self._compare_parts(other)
        if o is None:
            return NotImplemented
        return self._x < o[0] or (self._x == o[0] and self._xx < o[1])

    def __le__(self, other):
        o = self._compare_parts(other)
        if o is None:
            return NotImplemented
        return self._x < o[0] or (self._x == o[0] and self._xx <= o[1])

    def __gt__(self, other):
        o = self._compare_parts(other)
        if o is None:
            return NotImplemented
        return self._x > o[0] or (self._x == o[0] and self._xx > o[1])

    def __ge__(self, other):
        o = self._compare_parts(other)
        if o is None:
            return NotImplemented
        return self._x > o[0] or (self._x == o[0] and self._xx >= o[1])

    def __repr__(self):
        return f"({self._x!r},{self._xx!r})"

    __str__ = __repr__

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    def __add__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self.subtract(other)

    def __rsub__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self.negate().add(other)

    def __mul__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        return self.divide(other)

    def __rtruediv__(self, other):
        other = _coerce(other)
        if other is NotImplemented:
            return other
        if isinstance(other, DD):
            return other.divide(self)
        return DD(other, 0.0).divide(self)

    def __pow__(self, n):
        if not isinstance(n, numbers.Integral):
            return NotImplemented
        return self.pow(int(n))


def _coerce(other):
    """Operand for the Python operators: a DD, a float or NotImplemented."""
    if isinstance(other, DD):
        return other
    if isinstance(other, numbers.Integral):
        return DD.of(other)
    if isinstance(other, numbers.Real):
        return float(other)
    return NotImplemented


DD.ZERO = DD(0.0, 0.0)
DD.ONE = DD(1.0, 0.0)
