"""
Error-free transformations for double precision arithmetic.

This module contains the building blocks used by the double-double type and
the compensated accumulators: Dekker's split, Knuth's two-sum, Dekker's
two-product and a product round-off that stays valid close to the overflow
and underflow limits.

All functions operate on Python floats (IEEE-754 binary64) and never raise
for numeric input. Non-finite values propagate as NaN or infinity.
"""

import math
from typing import Tuple

import numpy as np


# Dekker's split multiplier: 2^s + 1 with s = 27
MULTIPLIER = 1.0 + 2.0 ** 27

# Thresholds for the scaled product round-off
SAFE_UPPER = 2.0 ** 996
SAFE_LOWER = 2.0 ** -968
DOWN_SCALE = 2.0 ** -30
UP_SCALE = 2.0 ** 30
DOWN_SCALE2 = 2.0 ** -60
UP_SCALE2 = 2.0 ** 60

MIN_NORMAL = 2.2250738585072014e-308

# Exponent reported for values that cannot be scaled (zero, inf, nan)
NO_SCALE = 1024


def high_part(value: float) -> float:
    """
    Split a value into a high part holding at most 26 significant bits.

    The low part is ``value - high_part(value)``. The split uses a
    multiplication so sub-normal numbers are handled. Magnitudes above
    about 2^996 overflow in the multiplication and return NaN.

    Args:
        value: Value to split

    Returns:
        High part of the value
    """
    c = MULTIPLIER * value
    return c - (c - value)


def fast_two_sum(a: float, b: float) -> Tuple[float, float]:
    """
    Sum two values with the round-off, assuming ``|a| >= |b|``.

    Args:
        a: Larger magnitude value
        b: Smaller magnitude value

    Returns:
        Tuple of (sum, round-off)
    """
    x = a + b
    return x, fast_two_sum_low(a, b, x)


def fast_two_sum_low(a: float, b: float, x: float) -> float:
    """Round-off of ``x = a + b`` with ``|a| >= |b|``."""
    return b - (x - a)


def fast_two_diff(a: float, b: float) -> Tuple[float, float]:
    """Difference of two values with the round-off, assuming ``|a| >= |b|``."""
    x = a - b
    return x, (a - x) - b


def two_sum(a: float, b: float) -> Tuple[float, float]:
    """
    Sum two values with the exact round-off (Knuth).

    There is no ordering requirement on the arguments.

    Args:
        a: First value
        b: Second value

    Returns:
        Tuple of (sum, round-off) with ``sum + round-off == a + b`` exactly
    """
    x = a + b
    return x, two_sum_low(a, b, x)


def two_sum_low(a: float, b: float, x: float) -> float:
    """Round-off of ``x = a + b``."""
    b_virtual = x - a
    return (a - (x - b_virtual)) + (b - b_virtual)


def two_diff(a: float, b: float) -> Tuple[float, float]:
    """Difference of two values with the exact round-off."""
    x = a - b
    return x, two_diff_low(a, b, x)


def two_diff_low(a: float, b: float, x: float) -> float:
    """Round-off of ``x = a - b``."""
    b_virtual = a - x
    return (a - (x + b_virtual)) - (b - b_virtual)


def two_product(x: float, y: float) -> Tuple[float, float]:
    """
    Multiply two values with the round-off (Dekker's mul12).

    No scaling is performed: the round-off is only exact when the split of
    each argument does not overflow and the low parts do not underflow.
    Use ``product_low`` for a round-off valid across the exponent range.

    Args:
        x: First factor
        y: Second factor

    Returns:
        Tuple of (product, round-off)
    """
    xy = x * y
    return xy, two_product_low(x, y, xy)


def two_product_low(x: float, y: float, xy: float) -> float:
    """Round-off of ``xy = x * y`` using Dekker's split without scaling."""
    hx = high_part(x)
    lx = x - hx
    hy = high_part(y)
    ly = y - hy
    return two_product_low_split(hx, lx, hy, ly, xy)


def two_product_low_split(hx: float, lx: float, hy: float, ly: float, xy: float) -> float:
    """
    Round-off of a product from the pre-split factors.

    Args:
        hx: High part of the first factor
        lx: Low part of the first factor
        hy: High part of the second factor
        ly: Low part of the second factor
        xy: Rounded product

    Returns:
        Round-off of the product
    """
    return lx * ly - (((xy - hx * hy) - lx * hy) - hx * ly)


def two_square(x: float) -> Tuple[float, float]:
    """Square a value with the round-off."""
    x2 = x * x
    return x2, two_square_low(x, x2)


def two_square_low(x: float, x2: float) -> float:
    """Round-off of ``x2 = x * x``."""
    hx = high_part(x)
    lx = x - hx
    return two_square_low_split(hx, lx, x2)


def two_square_low_split(hx: float, lx: float, x2: float) -> float:
    """Round-off of a square from the pre-split value."""
    return lx * lx - ((x2 - hx * hx) - 2 * lx * hx)


def product_low(x: float, y: float, xy: float) -> float:
    """
    Round-off of ``xy = x * y`` valid close to the limits of the exponent range.

    When the product is not normal there is no representable round-off:
    the result is 0.0 for a sub-normal or zero product and NaN for an
    infinite or NaN product. Large arguments are scaled down before the
    split and tiny products are scaled up so the low parts do not underflow.

    Args:
        x: First factor
        y: Second factor
        xy: Rounded product ``x * y``

    Returns:
        Round-off of the product
    """
    if is_not_normal(xy):
        return xy - xy

    a = abs(x)
    b = abs(y)
    ab = abs(xy)
    if a + b + ab >= SAFE_UPPER:
        # Product is finite so only the largest factor needs scaling
        if a > b:
            return two_product_low(x * DOWN_SCALE, y, xy * DOWN_SCALE) * UP_SCALE
        return two_product_low(x, y * DOWN_SCALE, xy * DOWN_SCALE) * UP_SCALE

    if ab <= SAFE_LOWER:
        return two_product_low(x * UP_SCALE, y * UP_SCALE, xy * UP_SCALE2) * DOWN_SCALE2

    return two_product_low(x, y, xy)


def is_not_normal(a: float) -> bool:
    """Return True if the value is zero, sub-normal, infinite or NaN."""
    return not (MIN_NORMAL <= abs(a) < math.inf)


def two_pow(n: int) -> float:
    """Exact power of two ``2^n`` for ``n`` in [-1022, 1023]."""
    return math.ldexp(1.0, n)


def get_scale(a: float) -> int:
    """
    Unbiased binary exponent of a value (``floor(log2(|a|))``).

    Sub-normal numbers report their true exponent below -1022.

    Args:
        a: Value

    Returns:
        Exponent, or 1024 for zero, infinite or NaN values
    """
    if a == 0 or not math.isfinite(a):
        return NO_SCALE
    return math.frexp(a)[1] - 1


def ieee_pow(x: float, n) -> float:
    """
    Power ``x^n`` with IEEE-754 results in place of Python exceptions.

    Overflow returns infinity, ``0^-n`` returns a signed infinity and
    ``x^0`` is 1 for any ``x`` including NaN. The sign of the result uses
    the parity of the integer ``n`` so exponents beyond 2^53 keep it.

    Args:
        x: Base
        n: Integral exponent

    Returns:
        Power as a float
    """
    n = int(n)
    with np.errstate(all="ignore"):
        y = float(np.power(abs(np.float64(x)), np.float64(n)))
    if n & 1 and math.copysign(1.0, x) < 0:
        return -y
    return y


def ieee_divide(a: float, b: float) -> float:
    """Quotient ``a / b`` returning a signed infinity or NaN for a zero divisor."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b
