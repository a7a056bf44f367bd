"""Pytest configuration for repository-relative imports and shared samples."""

import os
import sys

import matplotlib
import numpy as np
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")

from curvefitter.datasets import DatasetSession  # noqa: E402


@pytest.fixture
def collinear_samples():
    return [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]


@pytest.fixture
def exponential_samples():
    x = np.arange(6, dtype=float)
    return list(zip(x, 2.0 * np.exp(0.5 * x)))


@pytest.fixture
def saturation_samples():
    x = np.arange(11, dtype=float)
    return list(zip(x, 10.0 * (1.0 - np.exp(-0.3 * x))))


@pytest.fixture
def session():
    """Session with a linear dataset, an exponential one, and an empty one."""
    s = DatasetSession()
    linear = s.create_dataset(name="Line")
    for x in range(5):
        s.add_point(x, 2 * x + 1, dataset_id=linear.id)
    growth = s.create_dataset(name="Growth", fit_family="exponential")
    for x in range(5):
        s.add_point(x, 3.0 * np.exp(0.4 * x), dataset_id=growth.id)
    s.create_dataset(name="Empty")
    return s
