"""
Exact summation and linear combinations of doubles.

The ``Sum`` accumulator keeps the running total as an expansion: a list of
non-overlapping doubles of increasing magnitude whose exact sum equals the
exact sum of every finite term added (Shewchuk's grow-expansion). Products
contribute the rounded product and its exact round-off. The final value is
the correctly rounded total, so the result does not depend on the order of
the terms.
"""

import math
import numbers
from typing import List

from .arrays import ensure_same_length, to_float_array
from .dd import DD
from .extended import product_low


class Sum:
    """
    Accumulator for the exact sum of doubles and products of doubles.

    Non-finite terms are summed separately with IEEE-754 arithmetic and
    take precedence in the result: any infinity gives infinity, opposite
    infinities or a NaN give NaN. A finite total that overflows during
    accumulation is recorded as a signed infinity.

    The accumulator is a mutable working variable; it is not thread safe.

    Example:
        >>> Sum.of(1e100, 1.0, -2.0, -1e100).get_as_double()
        -1.0
    """

    def __init__(self):
        self._partials: List[float] = []
        self._special = 0.0

    @classmethod
    def create(cls) -> "Sum":
        """Create an empty accumulator (value 0)."""
        return cls()

    @classmethod
    def of(cls, *values) -> "Sum":
        """
        Create an accumulator holding the sum of the values.

        Args:
            *values: Numbers, or a single array-like of numbers

        Returns:
            New accumulator
        """
        s = cls()
        if len(values) == 1 and not isinstance(values[0], (numbers.Real, DD, Sum)):
            return s.add_all(values[0])
        for v in values:
            s.add(v)
        return s

    @classmethod
    def of_products(cls, a, b) -> "Sum":
        """
        Create an accumulator holding the sum of products ``a[i] * b[i]``.

        Raises:
            ValueError: If the arrays differ in length
        """
        return cls().add_products(a, b)

    def add(self, value) -> "Sum":
        """
        Add a number, a ``DD`` or the total of another ``Sum``.

        Args:
            value: Term to add

        Returns:
            This accumulator
        """
        if isinstance(value, Sum):
            for p in list(value._partials):
                self._add_term(p)
            self._special += value._special
        elif isinstance(value, DD):
            self._add_term(value.hi)
            self._add_term(value.lo)
        elif isinstance(value, numbers.Integral):
            self.add(DD.of(value))
        else:
            self._add_term(float(value))
        return self

    def accept(self, value):
        """Consumer form of ``add``."""
        self.add(value)

    def __iadd__(self, value):
        return self.add(value)

    def add_all(self, values) -> "Sum":
        """
        Add every value of an array-like (sequence, numpy array or tensor).

        Returns:
            This accumulator
        """
        for v in to_float_array(values):
            self._add_term(v)
        return self

    def add_product(self, a: float, b: float) -> "Sum":
        """
        Add the exact product ``a * b``.

        If the round-off of a finite product cannot be computed it is
        treated as zero and the rounded product is used.

        Args:
            a: First factor
            b: Second factor

        Returns:
            This accumulator
        """
        a = float(a)
        b = float(b)
        p = a * b
        if not math.isfinite(p):
            self._special += p
            return self
        e = product_low(a, b, p)
        if not math.isfinite(e):
            e = 0.0
        self._add_term(p)
        self._add_term(e)
        return self

    def add_products(self, a, b) -> "Sum":
        """
        Add the sum of products ``a[i] * b[i]``.

        Args:
            a: First factors
            b: Second factors

        Returns:
            This accumulator

        Raises:
            ValueError: If the arrays differ in length
        """
        a = to_float_array(a)
        b = to_float_array(b)
        ensure_same_length(a, b)
        for x, y in zip(a, b):
            self.add_product(x, y)
        return self

    def _add_term(self, x: float):
        if not math.isfinite(x):
            self._special += x
            return
        partials = self._partials
        i = 0
        for y in partials:
            if abs(x) < abs(y):
                x, y = y, x
            hi = x + y
            if math.isinf(hi):
                # The exact total is beyond the double range
                self._special += hi
                partials.clear()
                return
            lo = y - (hi - x)
            if lo:
                partials[i] = lo
                i += 1
            x = hi
        del partials[i:]
        if x:
            partials.append(x)

    def get_as_double(self) -> float:
        """
        Correctly rounded value of the exact total.

        The accumulator is not modified and can continue to grow.

        Returns:
            Total rounded to the nearest double (ties to even)
        """
        if self._special:
            return self._special
        partials = self._partials
        n = len(partials)
        if n == 0:
            return 0.0
        n -= 1
        hi = partials[n]
        lo = 0.0
        while n > 0:
            x = hi
            n -= 1
            y = partials[n]
            hi = x + y
            lo = y - (hi - x)
            if lo:
                break
        # Correct a half-way rounding when the remaining terms push the
        # exact value past the tie
        if n > 0 and ((lo < 0 and partials[n - 1] < 0) or (lo > 0 and partials[n - 1] > 0)):
            y = lo * 2
            x = hi + y
            if y == x - hi:
                hi = x
        return hi

    def __float__(self) -> float:
        return self.get_as_double()

    def __repr__(self):
        return f"Sum({self.get_as_double()!r})"


def linear_combination(a, b) -> float:
    """
    Correctly rounded sum of products ``a[i] * b[i]``.

    Args:
        a: First factors
        b: Second factors

    Returns:
        Linear combination

    Raises:
        ValueError: If the arrays differ in length
    """
    return Sum.of_products(a, b).get_as_double()
