"""
Vector norms with extended precision and scaling.

``Norm.L2`` avoids overflow and underflow by splitting the coordinates in
three bands (large, normal, small), scaling the large and small bands by an
exact power of two before squaring, and accumulating each band with a
compensated sum. The result is within 1 ULP of the exact norm and does not
depend on whether the fixed-arity or the array form is used.
"""

import math
from enum import Enum
from typing import List

from .arrays import ensure_non_empty, to_float_array
from .extended import two_square_low, two_sum_low
from .summation import Sum


SMALL_THRESH = 2.0 ** -511
LARGE_THRESH = 2.0 ** 496
SCALE_DOWN = 2.0 ** -600
SCALE_UP = 2.0 ** 600


def _manhattan(v: List[float]) -> float:
    if len(v) == 2:
        return abs(v[0]) + abs(v[1])
    s = Sum.create()
    for x in v:
        s.add(abs(x))
    return s.get_as_double()


def _maximum(v: List[float]) -> float:
    result = 0.0
    for x in v:
        x = abs(x)
        if x != x:
            return x
        if x > result:
            result = x
    return result


def _euclidean(v: List[float]) -> float:
    # Sums and compensations of the big, normal and small bands
    s1 = s2 = s3 = 0.0
    c1 = c2 = c3 = 0.0
    for i, x in enumerate(v):
        x = abs(x)
        if not math.isfinite(x):
            return _euclidean_special(v, i)
        if x > LARGE_THRESH:
            sx = x * SCALE_DOWN
            p = sx * sx
            s = s1 + p
            c1 += two_square_low(sx, p) + two_sum_low(s1, p, s)
            s1 = s
        elif x < SMALL_THRESH:
            sx = x * SCALE_UP
            p = sx * sx
            s = s3 + p
            c3 += two_square_low(sx, p) + two_sum_low(s3, p, s)
            s3 = s
        else:
            p = x * x
            s = s2 + p
            c2 += two_square_low(x, p) + two_sum_low(s2, p, s)
            s2 = s

    # Combine the most significant band with the next one. The scale
    # factors are applied one at a time: their product underflows.
    if s1 != 0:
        s2_adj = s2 * SCALE_DOWN * SCALE_DOWN
        total = s1 + s2_adj
        comp = two_sum_low(s1, s2_adj, total) + c1 + (c2 * SCALE_DOWN * SCALE_DOWN)
        return math.sqrt(total + comp) * SCALE_UP
    if s2 != 0:
        s3_adj = s3 * SCALE_DOWN * SCALE_DOWN
        total = s2 + s3_adj
        comp = two_sum_low(s2, s3_adj, total) + c2 + (c3 * SCALE_DOWN * SCALE_DOWN)
        return math.sqrt(total + comp)
    return math.sqrt(s3 + c3) * SCALE_DOWN


def _euclidean_special(v: List[float], start: int) -> float:
    # NaN takes precedence over infinity
    for x in v[start:]:
        if x != x:
            return math.nan
    return math.inf


class Norm(Enum):
    """
    Vector norms.

    Each member is called with two or three coordinates, or with a single
    array-like (sequence, numpy array or torch tensor):

        >>> Norm.L2.of(3.0, -4.0)
        5.0
        >>> Norm.L1.of([1.0, -2.0, 3.0])
        6.0

    Members:
        L1: Manhattan norm, the exact sum of absolute values (alias MANHATTAN)
        L2: Euclidean norm (alias EUCLIDEAN)
        LINF: Maximum absolute value (alias MAXIMUM)
    """

    L1 = "manhattan"
    MANHATTAN = "manhattan"
    L2 = "euclidean"
    EUCLIDEAN = "euclidean"
    LINF = "maximum"
    MAXIMUM = "maximum"

    def of(self, *args) -> float:
        """
        Compute the norm.

        Args:
            *args: Two or three coordinates, or one array-like of coordinates

        Returns:
            Norm of the vector

        Raises:
            ValueError: If the array is empty
            TypeError: If the number of arguments is not supported
        """
        if len(args) == 1:
            v = to_float_array(args[0])
            ensure_non_empty(v)
        elif len(args) in (2, 3):
            v = [float(x) for x in args]
        else:
            raise TypeError(f"Norm.of() takes 2 or 3 coordinates or an array, got {len(args)} arguments")
        return _COMPUTE[self.value](v)

    def __call__(self, *args) -> float:
        return self.of(*args)


_COMPUTE = {
    "manhattan": _manhattan,
    "euclidean": _euclidean,
    "maximum": _maximum,
}
