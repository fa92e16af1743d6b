"""
Higher accuracy double-double arithmetic.

These functions compute the same operations as the ``DD`` methods but keep
the next order of cross terms in the error-free expansion before the final
reduction. They cost 1.5 to 5 times more and roughly halve the error
(about 1 eps^2 instead of 4 eps^2 relative to the exact result).
"""

from typing import Tuple

from .dd import (
    DD,
    Parts,
    accurate_add_double,
    accurate_add_parts,
    simple_pow_parts,
    simple_pow_scaled_parts,
)
from .extended import (
    fast_two_sum,
    fast_two_sum_low,
    high_part,
    ieee_divide,
    is_not_normal,
    two_product_low_split,
    two_square_low_split,
    two_sum,
    two_sum_low,
)


def add(x: DD, y) -> DD:
    """
    Accurate sum of a double-double and a double-double or double.

    Args:
        x: First value
        y: Second value

    Returns:
        Sum computed with an expansion
    """
    if isinstance(y, DD):
        return DD(*accurate_add_parts(x.hi, x.lo, y.hi, y.lo))
    return DD(*accurate_add_double(x.hi, x.lo, float(y)))


def subtract(x: DD, y) -> DD:
    """Accurate difference of a double-double and a double-double or double."""
    if isinstance(y, DD):
        return DD(*accurate_add_parts(x.hi, x.lo, -y.hi, -y.lo))
    return DD(*accurate_add_double(x.hi, x.lo, -float(y)))


def _accurate_multiply_double(x: float, xx: float, y: float) -> Parts:
    xh = high_part(x)
    xl = x - xh
    xxh = high_part(xx)
    xxl = xx - xxh
    yh = high_part(y)
    yl = y - yh

    p00 = x * y
    q00 = two_product_low_split(xh, xl, yh, yl, p00)
    p10 = xx * y
    q10 = two_product_low_split(xxh, xxl, yh, yl, p10)

    # Collect the O(eps) terms with a round-off so O(eps^2) terms can be added
    s0 = p00
    s1 = p10 + q00
    r2 = two_sum_low(p10, q00, s1)
    u = s0 + s1
    v = fast_two_sum_low(s0, s1, u)
    return fast_two_sum(u, r2 + q10 + v)


def _accurate_multiply_parts(x: float, xx: float, y: float, yy: float) -> Parts:
    # (x, xx) * (y, yy) with (pij, qij) = two-prod(ai, bj):
    # p00                O(1)
    # p01, p10, q00      O(eps)
    # p11, q01, q10      O(eps^2)
    # q11                O(eps^3), not required for 106 bits
    xh = high_part(x)
    xl = x - xh
    xxh = high_part(xx)
    xxl = xx - xxh
    yh = high_part(y)
    yl = y - yh
    yyh = high_part(yy)
    yyl = yy - yyh

    p00 = x * y
    q00 = two_product_low_split(xh, xl, yh, yl, p00)
    p01 = x * yy
    q01 = two_product_low_split(xh, xl, yyh, yyl, p01)
    p10 = xx * y
    q10 = two_product_low_split(xxh, xxl, yh, yl, p10)
    p11 = xx * yy

    s0 = p00
    # Sum (p01, p10, q00) -> (s1, r2)
    u = p01 + p10
    v = two_sum_low(p01, p10, u)
    s1 = q00 + u
    w = two_sum_low(q00, u, s1)
    r2 = v + w
    # Collect (s0, s1, r2 + p11 + q01 + q10)
    u = s0 + s1
    v = fast_two_sum_low(s0, s1, u)
    return fast_two_sum(u, r2 + p11 + q01 + q10 + v)


def multiply(x: DD, y) -> DD:
    """
    Accurate product of a double-double and a double-double or double.

    The O(eps^2) cross terms omitted by ``DD.multiply`` are included.
    """
    if isinstance(y, DD):
        return DD(*_accurate_multiply_parts(x.hi, x.lo, y.hi, y.lo))
    return DD(*_accurate_multiply_double(x.hi, x.lo, float(y)))


def _accurate_square(x: float, xx: float) -> Parts:
    xh = high_part(x)
    xl = x - xh
    xxh = high_part(xx)
    xxl = xx - xxh

    p00 = x * x
    q00 = two_square_low_split(xh, xl, p00)
    p01 = x * xx
    q01 = two_product_low_split(xh, xl, xxh, xxl, p01)
    p11 = xx * xx

    s0 = p00
    s1 = q00 + 2 * p01
    r2 = two_sum_low(q00, 2 * p01, s1)
    u = s0 + s1
    v = fast_two_sum_low(s0, s1, u)
    return fast_two_sum(u, r2 + p11 + 2 * q01 + v)


def square(x: DD) -> DD:
    """Accurate square of a double-double."""
    return DD(*_accurate_square(x.hi, x.lo))


def _collect(q0: float, q1: float, q2: float) -> DD:
    q, qq = fast_two_sum(q0, q1)
    return DD(*two_sum(q, qq + q2))


def divide(x: DD, y) -> DD:
    """
    Accurate quotient of a double-double and a double-double or double.

    Long division where each remainder uses the accurate product and sum.

    Args:
        x: Dividend
        y: Divisor

    Returns:
        Quotient; a non-normal leading digit has a zero low part
    """
    if isinstance(y, DD):
        y0 = y.hi
        y1 = y.lo
    else:
        y0 = float(y)
        y1 = 0.0
    q0 = ieee_divide(x.hi, y0)
    if is_not_normal(q0):
        return DD(q0, 0.0)
    p0, p1 = _accurate_multiply_double(y0, y1, q0)
    r0, r1 = accurate_add_parts(x.hi, x.lo, -p0, -p1)
    q1 = r0 / y0
    p0, p1 = _accurate_multiply_double(y0, y1, q1)
    r0, r1 = accurate_add_parts(r0, r1, -p0, -p1)
    q2 = r0 / y0
    return _collect(q0, q1, q2)


def reciprocal(y: DD) -> DD:
    """Accurate reciprocal of a double-double."""
    y0 = y.hi
    y1 = y.lo
    q0 = ieee_divide(1.0, y0)
    if is_not_normal(q0):
        return DD(q0, 0.0)
    p0, p1 = _accurate_multiply_double(y0, y1, q0)
    r0, r1 = accurate_add_double(-p0, -p1, 1.0)
    q1 = r0 / y0
    p0, p1 = _accurate_multiply_double(y0, y1, q1)
    r0, r1 = accurate_add_parts(r0, r1, -p0, -p1)
    q2 = r0 / y0
    return _collect(q0, q1, q2)


def sqrt(x: DD) -> DD:
    """
    Accurate square root of a double-double.

    Repeats the Dekker iteration of ``DD.sqrt`` using the accurate square.
    Special cases are the same as ``DD.sqrt``.
    """
    c = x.sqrt()
    if is_not_normal(c.hi):
        return c
    u = square(c)
    cc = (x.hi - u.hi - u.lo + x.lo) * 0.5 / c.hi
    return DD(*fast_two_sum(c.hi, c.lo + cc))


def simple_pow(x: float, xx: float, n: int) -> DD:
    """
    Integer power of the double-double ``(x, xx)`` (van Mulbregt).

    Computes ``x^n`` with the native power and corrects for the low part
    using ``(1 + xx/x)^n``. Negative powers are inverted with safe scaling.
    Unlike ``DD.pow`` there is no shortcut for ``n == 1``.

    Args:
        x: High part
        xx: Low part
        n: Exponent

    Returns:
        Power
    """
    return DD(*simple_pow_parts(x, xx, n))


def simple_pow_scaled(x: float, xx: float, n: int) -> Tuple[DD, int]:
    """
    Integer power of ``(x, xx)`` as a fraction in [0.5, 1) and an exponent.

    Large powers are decomposed recursively so intermediate results stay
    within the double range.

    Args:
        x: High part
        xx: Low part
        n: Exponent

    Returns:
        Tuple of (fraction, exponent)
    """
    f, exp = simple_pow_scaled_parts(x, xx, n)
    return DD(*f), exp
