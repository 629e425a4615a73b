"""Shared test fixtures for pybaryrational tests."""

import math

import numpy as np
import pytest

from pybaryrational import BarycentricRational


# ---------------------------------------------------------------------------
# Test functions and data generators
# ---------------------------------------------------------------------------

def runge(x):
    """Runge's function 1 / (1 + 25 x^2)"""
    return 1.0 / (1.0 + 25.0 * x * x)


def cubic(x):
    """x^3 - 2x + 1"""
    return x ** 3 - 2.0 * x + 1.0


def random_increasing(rng, n, start, low, high):
    """n strictly increasing nodes from *start* with U(low, high) gaps."""
    gaps = rng.uniform(low, high, size=n - 1)
    return start + np.concatenate(([0.0], np.cumsum(gaps)))


SCENARIO_NODES = [0.1, 1.3, 2.0, 3.5]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="module")
def random_data():
    """500 irregular nodes with gaps in [0.1, 1) and random values in [0.1, 1)."""
    rng = np.random.default_rng(42)
    x = random_increasing(rng, 500, rng.uniform(0.1, 1.0), 0.1, 1.0)
    y = rng.uniform(0.1, 1.0, size=500)
    return x, y


@pytest.fixture(scope="module")
def runge_data():
    """500 dense nodes from -2 with gaps in [0.005, 0.01), Runge samples."""
    rng = np.random.default_rng(7)
    x = random_increasing(rng, 500, -2.0, 0.005, 0.01)
    return x, runge(x)


@pytest.fixture(scope="module")
def sin_interp():
    """sin on 61 equispaced nodes in [0, 3], order 4."""
    x = np.linspace(0.0, 3.0, 61)
    return BarycentricRational.from_function(math.sin, x, order=4)


@pytest.fixture
def scenario_interp():
    """Four nodes [0.1, 1.3, 2.0, 3.5], order 0."""
    return BarycentricRational(SCENARIO_NODES, [2.0, -1.0, 4.0, 0.5], order=0)
