"""
Test suite for the double-double numerics library.

Test Structure:
- test_extended.py: Error-free transformation primitives
- test_dd.py: Double-double construction, arithmetic and conversions
- test_dd_ext.py: Higher accuracy double-double operations
- test_dd_math.py: Triple-double scaled power
- test_summation.py: Exact sums and linear combinations
- test_norm.py: Vector norms
- test_field.py: Default operator implementations
- helpers.py: mpmath reference values and assertions
- conftest.py: Shared fixtures and configuration

Usage:
    # Run all tests
    pytest

    # Run tests with coverage
    pytest --cov=ddnum

    # Run only fast tests
    pytest -m "not slow"
"""

__version__ = "1.0.0"
