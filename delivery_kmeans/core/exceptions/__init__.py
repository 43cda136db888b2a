"""Exceptions package."""

from delivery_kmeans.core.exceptions.clustering import (
    ClusteringError,
    ConfigurationError,
    EmptyGroupError,
    NonConvergenceError,
)

__all__ = [
    "ClusteringError",
    "ConfigurationError",
    "EmptyGroupError",
    "NonConvergenceError",
]
