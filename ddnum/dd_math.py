"""
Triple-double intermediates for an accurate scaled power.

``pow_scaled`` computes ``x^n`` by binary exponentiation carrying a
triple-double intermediate and a separate binary exponent, so the result
is within about 1 eps^2 of the exact value and never over/underflows.
"""

import math
from typing import Tuple

from .dd import DD, add_parts, frexp_parts
from .extended import (
    fast_two_sum,
    fast_two_sum_low,
    high_part,
    ieee_pow,
    two_pow,
    two_product_low_split,
    two_square_low_split,
    two_sum_low,
)


SAFE_MULTIPLY = 2.0 ** 500

Triple = Tuple[float, float, float]


def pow_scaled(x: DD, n: int) -> Tuple[DD, int]:
    """
    Integer power as a fraction in [0.5, 1) and a binary exponent.

    Args:
        x: Base
        n: Exponent

    Returns:
        Tuple of (fraction, exponent) with ``x^n = fraction * 2^exponent``.
        ``n == 0`` returns ((0.5, 0), 1); zero and non-finite bases return
        the IEEE power with exponent 0.
    """
    if n == 0:
        return DD(0.5, 0.0), 1
    if not math.isfinite(x.hi) or x.hi == 0:
        return DD(ieee_pow(x.hi, n), 0.0), 0

    (f0, f1), b = frexp_parts(x.hi, x.lo)
    if abs(f0) == 0.5 and f1 == 0:
        # Exact power of 2: (f * 2^b)^n = (2f)^n * 2^((b-1)n)
        y0 = 0.5 * ieee_pow(2 * f0, n)
        y1 = math.copysign(0.0, y0 * f0 * x.lo)
        return DD(y0, y1), 1 + (b - 1) * n

    return _compute_pow_scaled(b, f0, f1, n)


def _compute_pow_scaled(b: int, x: float, xx: float, n: int) -> Tuple[DD, int]:
    # Scale the fraction to [1, 2): 2^be * (b0, b1)
    be = b - 1
    b0 = x * 2
    b1 = xx * 2
    b0h = high_part(b0)
    b0l = b0 - b0h
    b1h = high_part(b1)
    b1l = b1 - b1h

    # Result 2^fe * (f0, f1, f2), initialised to b^1
    fe = be
    f0 = b0
    f1 = b1
    f2 = 0.0

    an = abs(n)
    # Bits below the highest set bit, most significant first
    for bit in bin(an)[3:]:
        fe <<= 1
        f0, f1, f2 = _square3(f0, f1, f2)
        if abs(f0) > SAFE_MULTIPLY:
            # Rescale to [1, 2); exponent is below 1001 so 2^-e is normal
            e = math.frexp(f0)[1] - 1
            s = two_pow(-e)
            fe += e
            f0 *= s
            f1 *= s
            f2 *= s
        if bit == "1":
            fe += be
            f0, f1, f2 = _multiply3_dd(f0, f1, f2, b0, b1, b0h, b0l, b1h, b1l)

    # Ensure (f0, f1) are accurate to 1 ulp
    u = f1 + f2
    t0, t1 = fast_two_sum(f0, u)
    if n < 0:
        v = fast_two_sum_low(f1, f2, u)
        # Value is in about [1, 2^501] so inversion is safe
        f, e = frexp_parts(*_inverse3(t0, t1, v))
        return DD(*f), e - fe
    f, e = frexp_parts(t0, t1)
    return DD(*f), fe + e


def _square3(f0: float, f1: float, f2: float) -> Triple:
    # (a0, a1, a2)^2 summed by order with (pij, qij) = two-prod(ai, aj):
    # (2 p01, q00)                 O(eps)
    # (2 p02, 2 q01, p11, r2)      O(eps^2)
    # (2 p12, 2 q02, q11, r3)      O(eps^3)
    a0h = high_part(f0)
    a0l = f0 - a0h
    a1h = high_part(f1)
    a1l = f1 - a1h
    a2h = high_part(f2)
    a2l = f2 - a2h

    p00 = f0 * f0
    q00 = two_square_low_split(a0h, a0l, p00)
    p01 = f0 * f1
    q01 = two_product_low_split(a0h, a0l, a1h, a1l, p01)
    p02 = f0 * f2
    q02 = two_product_low_split(a0h, a0l, a2h, a2l, p02)
    p11 = f1 * f1
    q11 = two_square_low_split(a1h, a1l, p11)
    p12 = f1 * f2

    s0 = p00
    s1 = 2 * p01 + q00
    r2 = two_sum_low(2 * p01, q00, s1)
    s2 = p02 + q01
    r3 = two_sum_low(p02, q01, s2)
    u = p11 + r2
    v = two_sum_low(p11, r2, u)
    s2, r3 = add_parts(2 * s2, 2 * r3, u, v)
    s3 = 2 * (p12 + q02) + q11 + r3
    return _norm3(s0, s1, s2, s3)


def _multiply3_dd(f0, f1, f2, b0, b1, b0h, b0l, b1h, b1l) -> Triple:
    # (a0, a1, a2) * (b0, b1) summed by order:
    # (p01, p10, q00)              O(eps)
    # (p11, p20, q01, q10, r2)     O(eps^2)
    # (p21, q11, q20, r3a, r3b)    O(eps^3)
    a0h = high_part(f0)
    a0l = f0 - a0h
    a1h = high_part(f1)
    a1l = f1 - a1h
    a2h = high_part(f2)
    a2l = f2 - a2h

    p00 = f0 * b0
    q00 = two_product_low_split(a0h, a0l, b0h, b0l, p00)
    p01 = f0 * b1
    q01 = two_product_low_split(a0h, a0l, b1h, b1l, p01)
    p10 = f1 * b0
    q10 = two_product_low_split(a1h, a1l, b0h, b0l, p10)
    p11 = f1 * b1
    q11 = two_product_low_split(a1h, a1l, b1h, b1l, p11)
    p20 = f2 * b0
    q20 = two_product_low_split(a2h, a2l, b0h, b0l, p20)
    p21 = f2 * b1

    s0 = p00
    u = p01 + p10
    v = two_sum_low(p01, p10, u)
    s1 = q00 + u
    w = two_sum_low(q00, u, s1)
    r2 = v + w
    r3a = two_sum_low(v, w, r2)

    s2 = p11 + p20
    r3b = two_sum_low(p11, p20, s2)
    u = q01 + q10
    v = two_sum_low(q01, q10, u)
    t0, _ = add_parts(s2, r3b, u, v)
    s2 = t0 + r2
    r3b = two_sum_low(t0, r2, s2)

    s3 = p21 + q11 + q20 + r3a + r3b
    return _norm3(s0, s1, s2, s3)


def _norm3(s0: float, s1: float, s2: float, s3: float) -> Triple:
    """Compress four overlapping terms to a normalized triple."""
    g0 = s0 + s1
    q = fast_two_sum_low(s0, s1, g0)
    g1 = q + s2
    q = fast_two_sum_low(q, s2, g1)
    g2 = q + s3
    g3 = fast_two_sum_low(q, s3, g2)
    # (g0, g1, g2, g3) -> (h0, h1, h2 + h3)
    q = g1 + g2
    h2 = fast_two_sum_low(g1, g2, q) + g3
    h0 = g0 + q
    h1 = fast_two_sum_low(g0, q, h0)
    return h0, h1, h2


def _multiply3(a0: float, a1: float, a2: float, b: float) -> Triple:
    # Triple-double times double; |a2 * b| < eps^2 |a0 * b| so q20 is dropped
    a0h = high_part(a0)
    a0l = a0 - a0h
    a1h = high_part(a1)
    a1l = a1 - a1h
    bh = high_part(b)
    bl = b - bh

    p00 = a0 * b
    q00 = two_product_low_split(a0h, a0l, bh, bl, p00)
    p10 = a1 * b
    q10 = two_product_low_split(a1h, a1l, bh, bl, p10)
    p20 = a2 * b

    s1 = p10 + q00
    r1 = two_sum_low(p10, q00, s1)
    u = p20 + q10
    v = two_sum_low(p20, q10, u)
    s2 = u + r1
    u = two_sum_low(u, r1, s2)
    return _norm3(p00, s1, s2, v + u)


def _add3_double(a0: float, a1: float, a2: float, b: float) -> Triple:
    # Quad-double plus double (Hida et al.) without the final term
    s0 = a0 + b
    u = two_sum_low(a0, b, s0)
    s1 = a1 + u
    v = two_sum_low(a1, u, s1)
    s2 = a2 + v
    u = two_sum_low(a2, v, s2)
    return _norm3(s0, s1, s2, u)


def _add3(a0: float, a1: float, a2: float, b0: float, b1: float, b2: float) -> Triple:
    # Quad-double plus quad-double (Hida et al.) without the final terms
    s0 = a0 + b0
    r1 = two_sum_low(a0, b0, s0)
    u = a1 + b1
    v = two_sum_low(a1, b1, u)
    s1 = r1 + u
    u = two_sum_low(r1, u, s1)
    r2 = v + u
    r3 = two_sum_low(v, u, r2)
    u = a2 + b2
    v = two_sum_low(a2, b2, u)
    s2 = r2 + u
    u = two_sum_low(r2, u, s2)
    s3 = v + u + r3
    return _norm3(s0, s1, s2, s3)


def _inverse3(y: float, yy: float, yyy: float) -> Tuple[float, float]:
    """Long division (1, 0, 0) / (y, yy, yyy) reduced to a double-double."""
    q0 = 1 / y
    t = _multiply3(y, yy, yyy, q0)
    r = _add3_double(-t[0], -t[1], -t[2], 1.0)
    q1 = r[0] / y
    t = _multiply3(y, yy, yyy, q1)
    r = _add3(-t[0], -t[1], -t[2], *r)
    q2 = r[0] / y
    t = _multiply3(y, yy, yyy, q2)
    r = _add3(-t[0], -t[1], -t[2], *r)
    q3 = r[0] / y
    s0, s1, s2 = _norm3(q0, q1, q2, q3)
    return fast_two_sum(s0, s1 + s2)
