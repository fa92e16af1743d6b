"""
Reference computations and assertions shared by the test modules.

Reference values are computed exactly (or to thousands of bits) with mpmath.
"""

import numpy as np
from mpmath import mp

from ddnum import DD


# Relative error units: eps = 2^-53, EPS = eps^2
EPS = 2.0 ** -106
DOUBLE_EPS = 2.0 ** -53

# Enough bits to hold the exact sum of any two doubles
EXACT_PREC = 2200


def random_dd(gen, scale: float = 1.0, signed: bool = True) -> DD:
    """
    Create a random normalized double-double.

    The high part is uniform in [1, 2) times the scale and the low part is
    a random fraction of the high part's round-off range.
    """
    hi = float(gen.uniform(1.0, 2.0)) * scale
    if signed and gen.random() < 0.5:
        hi = -hi
    lo = hi * float(gen.uniform(-1.0, 1.0)) * DOUBLE_EPS
    return DD.of_sum(hi, lo)


def mp_value(value):
    """Exact value of a double-double (or a float) as an mpmath number."""
    with mp.workprec(EXACT_PREC):
        if isinstance(value, DD):
            return mp.mpf(value.hi) + mp.mpf(value.lo)
        return mp.mpf(value)


def relative_error(actual: DD, expected) -> float:
    """Relative error of a double-double against an mpmath reference."""
    with mp.workprec(EXACT_PREC):
        e = mp.mpf(expected)
        a = mp_value(actual)
        if e == 0:
            return float(abs(a))
        return float(abs((a - e) / e))


def assert_dd_close(actual: DD, expected, max_relative_error: float):
    """Assert that a double-double is within a relative error of the reference."""
    err = relative_error(actual, expected)
    assert err <= max_relative_error, (
        f"Relative error {err / EPS:.3f} eps^2 exceeds threshold {max_relative_error / EPS:.3f} eps^2\n"
        f"Computed: {actual}, Reference: {mp.nstr(mp.mpf(expected), 40)}"
    )


def assert_normalized(value: DD):
    """Assert that the low part is the round-off of the high part."""
    assert value.hi == value.hi + value.lo, f"Not normalized: {value}"


def assert_same_float(actual: float, expected: float):
    """Assert two floats are identical including the sign of zero and NaN."""
    if expected != expected:
        assert actual != actual, f"Expected NaN, got {actual}"
    else:
        assert actual == expected, f"{actual} != {expected}"
        assert np.signbit(actual) == np.signbit(expected), f"Sign mismatch: {actual} vs {expected}"


