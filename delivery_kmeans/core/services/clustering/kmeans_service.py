"""
K-means clustering service for delivery locations.

This module provides a service that generates delivery points, seeds groups
and runs Lloyd's algorithm until the centroids stop moving. Each run owns its
own points, groups and random number generator, so independent runs never
share state.
"""

# Standard Library Imports
import math
import numbers
from dataclasses import dataclass, field
from typing import List, Optional, Sequence
from logging import Logger

# Third Party Imports
import numpy as np
from pydantic import BaseModel, Field

# Internal Imports
from delivery_kmeans.core.exceptions.clustering import (
    ConfigurationError,
    NonConvergenceError,
)
from delivery_kmeans.core.models.spatial import BoundingBox, Group, Point
from delivery_kmeans.core.services.clustering.lloyd import (
    assign_points_to_groups,
    generate_points,
    have_means_converged,
    inertia,
    initialize_groups,
    recalculate_group_means,
    reset_group_points,
)
from delivery_kmeans.utils.constants import (
    DEFAULT_COORDINATE_PRECISION,
    DEFAULT_ITERATION_LIMIT,
    DEFAULT_N_GROUPS,
    DEFAULT_N_POINTS,
    ClusteringState,
    EmptyGroupPolicy,
)
from delivery_kmeans.utils.logging import get_logger

# Initialize logger
logger: Logger = get_logger(__name__)


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass
class KMeansConfig:
    """Configuration for k-means clustering.

    Attributes:
        n_groups: Number of groups (K)
        n_points: Number of points to generate (N)
        bounding_box: Area the points are generated in
        iteration_limit: Maximum number of iterations before giving up
        random_state: Seed for reproducibility (None for fresh entropy)
        coordinate_precision: Decimal places generated coordinates are rounded to
        empty_group_policy: What to do with a group that receives no points
        convergence_tolerance: Absolute tolerance for convergence (None for exact equality)
        verbose: Whether to log every iteration at INFO level
    """

    n_groups: int = DEFAULT_N_GROUPS
    n_points: int = DEFAULT_N_POINTS
    bounding_box: BoundingBox = field(default_factory=BoundingBox)
    iteration_limit: int = DEFAULT_ITERATION_LIMIT
    random_state: Optional[int] = None
    coordinate_precision: Optional[int] = DEFAULT_COORDINATE_PRECISION
    empty_group_policy: EmptyGroupPolicy = EmptyGroupPolicy.KEEP
    convergence_tolerance: Optional[float] = None
    verbose: bool = False


class ClusterResult(BaseModel):
    """Final points and groups of a converged clustering run.

    Attributes:
        points: The clustered points, in generation order
        groups: The groups with their final centroids and members
        iterations: Number of iterations it took to converge
        state: Terminal state of the run
    """

    points: List[Point] = Field(default_factory=list)
    groups: List[Group] = Field(default_factory=list)
    iterations: int = 0
    state: ClusteringState = ClusteringState.CONVERGED

    def group_of(self, point: Point) -> Optional[int]:
        """Index of the group holding the point, or None if no group has it."""
        for index, group in enumerate(self.groups):
            if group.contains(point):
                return index
        return None

    def inertia(self) -> float:
        """Sum of squared member-to-centroid distances over all groups."""
        return inertia(self.groups)


class KMeansService:
    """Service class for clustering delivery points with k-means."""

    def __init__(self, config: Optional[KMeansConfig] = None):
        """Initialize the k-means service.

        Args:
            config: Configuration for clustering

        Raises:
            ConfigurationError: If the configuration is malformed
        """
        self.config = config or KMeansConfig()
        self._validate_config()

    def _validate_config(self) -> None:
        """Validate the configuration before anything runs.

        Raises:
            ConfigurationError: If validation fails
        """
        config = self.config
        if not isinstance(config.bounding_box, BoundingBox):
            raise ConfigurationError("bounding_box must be a BoundingBox")
        for name in ("n_groups", "n_points", "iteration_limit"):
            value = getattr(config, name)
            if not _is_integer(value):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if config.coordinate_precision is not None:
            if not _is_integer(config.coordinate_precision):
                raise ConfigurationError(
                    f"coordinate_precision must be an integer, got {config.coordinate_precision!r}"
                )
            if config.coordinate_precision < 0:
                raise ConfigurationError(
                    f"Coordinate precision cannot be negative, got {config.coordinate_precision}"
                )
        if config.convergence_tolerance is not None:
            tolerance = config.convergence_tolerance
            if (
                isinstance(tolerance, bool)
                or not isinstance(tolerance, numbers.Real)
                or not math.isfinite(tolerance)
            ):
                raise ConfigurationError(
                    f"convergence_tolerance must be a finite number, got {tolerance!r}"
                )
            if tolerance < 0:
                raise ConfigurationError(
                    f"Convergence tolerance cannot be negative, got {tolerance}"
                )
        if not isinstance(config.verbose, bool):
            raise ConfigurationError(f"verbose must be a bool, got {config.verbose!r}")
        try:
            config.empty_group_policy = EmptyGroupPolicy(config.empty_group_policy)
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown empty group policy: {config.empty_group_policy}"
            ) from e

    def _log_iteration(self, iteration: int, groups: Sequence[Group]) -> None:
        summary = ", ".join(
            f"({group.lat:.6f}, {group.lng:.6f}) x{len(group)}" for group in groups
        )
        message = f"Iteration {iteration}: {summary}"
        if self.config.verbose:
            logger.info(message)
        else:
            logger.debug(message)

    def run(self) -> ClusterResult:
        """Generate points, seed groups and cluster them.

        Returns:
            ClusterResult: The converged clustering

        Raises:
            NonConvergenceError: If the iteration limit is reached
        """
        rng = np.random.default_rng(self.config.random_state)
        points = generate_points(
            self.config.n_points,
            self.config.bounding_box,
            rng,
            precision=self.config.coordinate_precision,
        )
        return self.cluster(points, rng=rng)

    def cluster(
        self,
        points: Sequence[Point],
        groups: Optional[Sequence[Group]] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> ClusterResult:
        """Run Lloyd's algorithm on the given points.

        Args:
            points: Points to cluster
            groups: Initial groups (random centroids inside the points' bounding
                box when omitted); any members they carry are discarded
            rng: Random number generator for seeding and reseeding

        Returns:
            ClusterResult: The converged clustering

        Raises:
            ConfigurationError: If there are no points or the number of
                initial groups does not match ``n_groups``
            NonConvergenceError: If the iteration limit is reached
        """
        config = self.config
        points = list(points)
        if not points:
            raise ConfigurationError("Cannot cluster an empty set of points")
        if rng is None:
            rng = np.random.default_rng(config.random_state)

        if groups is None:
            groups = initialize_groups(
                config.n_groups, points, rng, precision=config.coordinate_precision
            )
        else:
            if len(groups) != config.n_groups:
                raise ConfigurationError(
                    f"Expected {config.n_groups} initial groups, got {len(groups)}"
                )
            groups = reset_group_points(groups)

        bounds = BoundingBox.enclosing(points)
        logger.info(
            f"Running k-means with {config.n_groups} groups on {len(points)} points "
            f"(limit {config.iteration_limit} iterations)"
        )

        state = ClusteringState.RUNNING
        iteration = 0
        while state is ClusteringState.RUNNING:
            old_groups = groups
            groups = assign_points_to_groups(points, groups)
            groups = recalculate_group_means(
                groups,
                empty_group_policy=config.empty_group_policy,
                rng=rng,
                bounding_box=bounds,
                precision=config.coordinate_precision,
            )
            iteration += 1
            self._log_iteration(iteration, groups)

            if iteration >= config.iteration_limit:
                state = ClusteringState.LIMIT_EXCEEDED
            elif have_means_converged(
                old_groups, groups, tolerance=config.convergence_tolerance
            ):
                state = ClusteringState.CONVERGED
            else:
                groups = reset_group_points(groups)

        if state is ClusteringState.LIMIT_EXCEEDED:
            logger.error(
                f"K-means did not converge before {config.iteration_limit} iterations"
            )
            raise NonConvergenceError(iterations=iteration, limit=config.iteration_limit)

        result = ClusterResult(
            points=points, groups=groups, iterations=iteration, state=state
        )
        logger.info(
            f"K-means converged after {iteration} iterations "
            f"(inertia {result.inertia():.6f})"
        )
        return result


def run_clustering(config: Optional[KMeansConfig] = None) -> ClusterResult:
    """Run one independent clustering with the given configuration.

    Args:
        config: Configuration for clustering (defaults when omitted)

    Returns:
        ClusterResult: The converged clustering

    Raises:
        ConfigurationError: If the configuration is malformed
        NonConvergenceError: If the iteration limit is reached
    """
    return KMeansService(config).run()
