# delivery_kmeans/utils/constants.py
"""
Constants for the application.

This module contains the clustering defaults and the enums shared by the
clustering service and the command line interface.
"""

# Standard Library Imports
from enum import Enum
from typing import Final

# Clustering defaults
DEFAULT_N_GROUPS: Final[int] = 3
DEFAULT_N_POINTS: Final[int] = 30
DEFAULT_ITERATION_LIMIT: Final[int] = 50

# Four decimal places is roughly 11m at the equator
DEFAULT_COORDINATE_PRECISION: Final[int] = 4

# Greater Melbourne delivery area
DEFAULT_MIN_LAT: Final[float] = -38.0056
DEFAULT_MAX_LAT: Final[float] = -37.5857
DEFAULT_MIN_LNG: Final[float] = 144.6103
DEFAULT_MAX_LNG: Final[float] = 145.3854


class ClusteringState(str, Enum):
    """States of the k-means main loop."""

    RUNNING = "running"
    CONVERGED = "converged"
    LIMIT_EXCEEDED = "limit_exceeded"


class EmptyGroupPolicy(str, Enum):
    """What to do with a group that received no points in an iteration."""

    KEEP = "keep"
    RESEED = "reseed"
    RAISE = "raise"
