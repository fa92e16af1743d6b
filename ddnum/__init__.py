"""
Double-Double Numerics Library

An extended precision floating-point library built on error-free
transformations of IEEE-754 doubles.

This library provides:
- Error-free two-sum, two-product and Dekker splitting primitives
- Double-double (DD) arithmetic with about 106 bits of precision
- Higher accuracy double-double operations and scaled integer powers
- Exact summation and linear combinations with correct rounding
- Overflow and underflow safe vector norms
"""

from .dd import DD
from . import dd_ext, dd_math, extended
from .field import Addition, Multiplication, NativeOperators
from .summation import Sum, linear_combination
from .norm import Norm

__version__ = "1.0.0"
__author__ = "DDNum Contributors"

__all__ = [
    "DD",
    "Sum",
    "Norm",
    "linear_combination",
    "Addition",
    "Multiplication",
    "NativeOperators",
    "dd_ext",
    "dd_math",
    "extended",
]
