"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def spd_matrix(rng):
    """Symmetric positive definite 4x4 matrix with well separated eigenvalues."""
    q, _ = np.linalg.qr(rng.standard_normal((4, 4)))
    return q @ np.diag([9.0, 5.0, 2.0, 0.5]) @ q.T


@pytest.fixture
def well_conditioned_system(rng):
    """Diagonally dominant 5x5 system with a known solution."""
    n = 5
    A = rng.standard_normal((n, n)) + n * np.eye(n)
    x_true = rng.standard_normal(n)
    b = A @ x_true
    return A, b, x_true


@pytest.fixture
def singular_matrix():
    """Exactly singular 3x3 matrix (third row = first + second)."""
    return np.array([[1.0, 1.0, 1.0], [0.0, 0.0, 1.0], [1.0, 1.0, 2.0]])
