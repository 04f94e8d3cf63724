"""Pytest configuration and shared fixtures for qpkit tests.

This module provides:
- A deterministic RNG fixture for numpy
- A fixture that switches debug mode on for one test
"""

import os

import numpy as np
import pytest

from qpkit.diagnostics import is_debug_enabled, set_debug_enabled


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the global numpy seed for reproducibility."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture(scope="function")
def debug_mode():
    """Enable debug mode for the duration of one test."""
    original = is_debug_enabled()
    set_debug_enabled(True)
    try:
        yield
    finally:
        set_debug_enabled(original)

