#!/usr/bin/env python3
"""
Pytest configuration and fixtures for double-double tests.

This file contains shared test fixtures, configuration, and utilities
used across the test suite.
"""

import pytest
import numpy as np
import torch
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture(scope="session")
def random_seed():
    """Set random seed for reproducible tests."""
    seed = 42
    np.random.seed(seed)
    torch.manual_seed(seed)
    return seed


@pytest.fixture
def rng(random_seed):
    """Seeded random generator for sampled test data."""
    return np.random.default_rng(random_seed)


@pytest.fixture
def cancellation_data():
    """Data where naive left-to-right summation cancels completely."""
    return [1e100, 1.0, -2.0, -1e100]


@pytest.fixture
def ill_conditioned_data():
    """Ill-conditioned data spanning many orders of magnitude."""
    gen = np.random.default_rng(42)
    n = 1000
    exponents = gen.uniform(-30, 30, n)
    signs = gen.choice([-1, 1], n)
    return (signs * 10.0 ** exponents).astype(np.float64)


@pytest.fixture(params=["list", "numpy", "torch"])
def array_type(request):
    """Parameterized fixture converting a list to each supported array type."""
    converters = {
        "list": list,
        "numpy": lambda v: np.array(v, dtype=np.float64),
        "torch": lambda v: torch.tensor(v, dtype=torch.float64),
    }
    return converters[request.param]


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "property: marks randomized property-based tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Mark tests that take long time as slow
        if "large" in item.name or "stress" in item.name:
            item.add_marker(pytest.mark.slow)

        # Mark property-based tests
        if "property" in item.name or "random" in item.name:
            item.add_marker(pytest.mark.property)

        # Mark integration tests
        if "integration" in item.name or "end_to_end" in item.name:
            item.add_marker(pytest.mark.integration)
