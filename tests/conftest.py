"""Pytest configuration and shared fixtures for numlab tests.

This module provides:
- A deterministic numpy RNG fixture
- Builders for well-conditioned random systems
- A captured stream for numlab log output
"""

import logging
import os
from io import StringIO

import numpy as np
import pytest

from numlab.logging import configure_logging


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0), so runs
    are reproducible while allowing override for debugging.
    """
    return np.random.default_rng(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture
def log_stream():
    """Route numlab logs at DEBUG into a ``StringIO``; restore WARNING to stderr after."""
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    yield stream
    configure_logging(level=logging.WARNING)


@pytest.fixture
def dominant_matrix(rng: np.random.Generator):
    """Factory for random strictly diagonally dominant ``n x n`` matrices."""

    def build(n: int) -> np.ndarray:
        a = rng.uniform(-1.0, 1.0, size=(n, n))
        a[np.diag_indices(n)] = np.sum(np.abs(a), axis=1) + rng.uniform(1.0, 2.0, size=n)
        return a

    return build


@pytest.fixture
def spd_matrix(rng: np.random.Generator):
    """Factory for random symmetric positive-definite ``n x n`` matrices."""

    def build(n: int) -> np.ndarray:
        m = rng.standard_normal((n, n))
        return m @ m.T + n * np.eye(n)

    return build
