"""
Ring-like interfaces for numeric types.

The abstract classes declare the primitive operations a number type must
provide. Derived operations have default implementations written in terms
of the primitives so any implementation gets them for free; concrete types
such as ``DD`` override them with specialised versions.
"""

from abc import ABC, abstractmethod


class Addition(ABC):
    """Binary addition with an identity and inverse."""

    __slots__ = ()

    @abstractmethod
    def add(self, a):
        """Return ``self + a``."""

    @abstractmethod
    def zero(self):
        """Return the additive identity."""

    @abstractmethod
    def negate(self):
        """Return the additive inverse ``-self``."""

    def is_zero(self) -> bool:
        """Return True if this is the additive identity."""
        return self == self.zero()


class Multiplication(ABC):
    """Binary multiplication with an identity and inverse."""

    __slots__ = ()

    @abstractmethod
    def multiply(self, a):
        """Return ``self * a``."""

    @abstractmethod
    def one(self):
        """Return the multiplicative identity."""

    @abstractmethod
    def reciprocal(self):
        """Return the multiplicative inverse ``1 / self``."""

    def is_one(self) -> bool:
        """Return True if this is the multiplicative identity."""
        return self == self.one()


class NativeOperators(Addition, Multiplication):
    """
    Operators of a numeric type supporting the usual arithmetic.

    Defaults are correct for any ring-like type but generally slow:
    ``multiply_int`` uses repeated doubling and ``pow`` uses binary
    exponentiation.
    """

    __slots__ = ()

    def subtract(self, a):
        """Return ``self - a``."""
        return self.add(a.negate())

    def divide(self, a):
        """Return ``self / a``."""
        return self.multiply(a.reciprocal())

    def multiply_int(self, n: int):
        """
        Repeated addition ``self + self + ... + self`` (n terms).

        Args:
            n: Number of terms, negative values negate the result

        Returns:
            Product of this value and an integer
        """
        if n < 0:
            return self.negate().multiply_int(-n)
        result = self.zero()
        term = self
        while n:
            if n & 1:
                result = result.add(term)
            n >>= 1
            if n:
                term = term.add(term)
        return result

    def pow(self, n: int):
        """
        Repeated multiplication ``self * self * ... * self`` (n factors).

        Args:
            n: Exponent, negative values invert the result

        Returns:
            Integer power of this value
        """
        if n < 0:
            return self.reciprocal().pow(-n)
        result = self.one()
        factor = self
        while n:
            if n & 1:
                result = result.multiply(factor)
            n >>= 1
            if n:
                factor = factor.multiply(factor)
        return result
