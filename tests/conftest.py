"""Shared fixtures for the test suite."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from delivery_kmeans.core.models.spatial import Group, Point


@pytest.fixture
def two_cluster_points():
    """Two tight pairs of points ten units apart."""
    return [
        Point(lat=0.0, lng=0.0),
        Point(lat=0.0, lng=1.0),
        Point(lat=10.0, lng=0.0),
        Point(lat=10.0, lng=1.0),
    ]


@pytest.fixture
def two_cluster_groups():
    """Initial groups sitting on the first point of each pair."""
    return [Group(lat=0.0, lng=0.0), Group(lat=10.0, lng=0.0)]


@pytest.fixture
def rng():
    return np.random.default_rng(42)
