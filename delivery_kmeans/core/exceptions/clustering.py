# delivery_kmeans/core/exceptions/clustering.py
"""
Exceptions for the clustering module.

This module provides custom exceptions for configuration and convergence
failures of the k-means engine.
"""

# Standard Library Imports
from typing import Optional


class ClusteringError(Exception):
    """Base class for clustering-related exceptions."""

    pass


class ConfigurationError(ClusteringError):
    """Raised when the clustering configuration or input is malformed."""

    def __init__(self, message: str = "Invalid clustering configuration.") -> None:
        self.message: str = message
        super().__init__(self.message)


class NonConvergenceError(ClusteringError):
    """Raised when the centroids do not stabilise within the iteration limit."""

    def __init__(
        self,
        iterations: int,
        limit: int,
        message: Optional[str] = None,
    ) -> None:
        self.iterations: int = iterations
        self.limit: int = limit
        self.message: str = message or (
            f"K-means did not converge before {limit} iterations"
        )
        super().__init__(self.message)


class EmptyGroupError(ClusteringError):
    """Raised when a group receives no points and the policy forbids recovery."""

    def __init__(self, group_index: int, iteration: Optional[int] = None) -> None:
        self.group_index: int = group_index
        self.iteration: Optional[int] = iteration
        where = f" at iteration {iteration}" if iteration is not None else ""
        self.message: str = f"Group {group_index} has no points{where}"
        super().__init__(self.message)
