"""
Step functions of Lloyd's algorithm (k-means) on planar lat/lng coordinates.

Every function here is pure: groups passed in are never modified, a new list
of groups is returned instead. The clustering service folds these steps into
its main loop.
"""

# Standard Library Imports
import math
from typing import List, Optional, Sequence, Union

# Third Party Imports
import numpy as np

# Internal Imports
from delivery_kmeans.core.exceptions.clustering import (
    ConfigurationError,
    EmptyGroupError,
)
from delivery_kmeans.core.models.spatial import BoundingBox, Group, Point
from delivery_kmeans.utils.constants import EmptyGroupPolicy
from delivery_kmeans.utils.logging import get_logger

# Initialize logger
logger = get_logger(__name__)

Location = Union[Point, Group]


def _random_coordinate(
    rng: np.random.Generator, low: float, high: float, precision: Optional[int]
) -> float:
    value = float(rng.uniform(low, high))
    if precision is not None:
        # Rounding may step over an edge of the box, so clamp back inside
        value = min(max(round(value, precision), low), high)
    return value


def _random_point(
    rng: np.random.Generator, bounds: BoundingBox, precision: Optional[int]
) -> Point:
    return Point(
        lat=_random_coordinate(rng, bounds.min_lat, bounds.max_lat, precision),
        lng=_random_coordinate(rng, bounds.min_lng, bounds.max_lng, precision),
    )


def generate_points(
    n_points: int,
    bounding_box: BoundingBox,
    rng: np.random.Generator,
    precision: Optional[int] = None,
) -> List[Point]:
    """Draw points uniformly at random inside a bounding box.

    Latitude and longitude are drawn independently per point. Duplicate
    points are allowed.

    Args:
        n_points: Number of points to generate
        bounding_box: Box the points are drawn from
        rng: Random number generator
        precision: Decimal places to round coordinates to (None keeps full precision)

    Returns:
        List[Point]: The generated points
    """
    if n_points <= 0:
        raise ConfigurationError(f"Number of points must be positive, got {n_points}")
    return [_random_point(rng, bounding_box, precision) for _ in range(n_points)]


def initialize_groups(
    n_groups: int,
    points: Sequence[Point],
    rng: np.random.Generator,
    precision: Optional[int] = None,
) -> List[Group]:
    """Seed groups with random centroids inside the bounding box of the points.

    Args:
        n_groups: Number of groups to create
        points: Points that will be clustered
        rng: Random number generator
        precision: Decimal places to round centroids to (None keeps full precision)

    Returns:
        List[Group]: Groups with random centroids and no members

    Raises:
        ConfigurationError: If there are no points or ``n_groups`` is not positive
    """
    if n_groups <= 0:
        raise ConfigurationError(f"Number of groups must be positive, got {n_groups}")
    bounds = BoundingBox.enclosing(points)
    groups = []
    for _ in range(n_groups):
        seed = _random_point(rng, bounds, precision)
        groups.append(Group(lat=seed.lat, lng=seed.lng))
    return groups


def distance(a: Location, b: Location) -> float:
    """Euclidean distance between two locations, treating lat/lng as planar."""
    horizontal = a.lat - b.lat
    vertical = a.lng - b.lng
    return math.sqrt(horizontal**2 + vertical**2)


def points_match(a: Location, b: Location) -> bool:
    """Whether two locations have exactly the same coordinates."""
    return a.lat == b.lat and a.lng == b.lng


def nearest_group_index(point: Point, groups: Sequence[Group]) -> int:
    """Index of the group whose centroid is closest to the point.

    Ties go to the group that comes first.
    """
    if not groups:
        raise ConfigurationError("Cannot assign a point to an empty list of groups")
    closest = 0
    closest_distance = distance(point, groups[0])
    for index in range(1, len(groups)):
        current_distance = distance(point, groups[index])
        if current_distance < closest_distance:
            closest, closest_distance = index, current_distance
    return closest


def assign_points_to_groups(
    points: Sequence[Point], groups: Sequence[Group]
) -> List[Group]:
    """Append each point to the group with the nearest centroid.

    Existing members are kept, so groups should come from
    ``reset_group_points`` (or be freshly initialized).

    Args:
        points: Points to assign
        groups: Groups to assign them to

    Returns:
        List[Group]: New groups with the points appended
    """
    members = [list(group.points) for group in groups]
    for point in points:
        members[nearest_group_index(point, groups)].append(point)
    return [
        group.model_copy(update={"points": group_members})
        for group, group_members in zip(groups, members)
    ]


def recalculate_group_means(
    groups: Sequence[Group],
    empty_group_policy: EmptyGroupPolicy = EmptyGroupPolicy.KEEP,
    rng: Optional[np.random.Generator] = None,
    bounding_box: Optional[BoundingBox] = None,
    precision: Optional[int] = None,
) -> List[Group]:
    """Move each centroid to the mean of its members.

    A group without members is handled according to ``empty_group_policy``:
    KEEP leaves the centroid where it was, RESEED draws a new centroid inside
    ``bounding_box`` from ``rng``, RAISE raises ``EmptyGroupError``.

    Args:
        groups: Groups with their members assigned
        empty_group_policy: Policy for groups without members
        rng: Random number generator, required for RESEED
        bounding_box: Box to reseed centroids in, required for RESEED
        precision: Decimal places to round reseeded centroids to

    Returns:
        List[Group]: New groups with recomputed centroids and the same members

    Raises:
        EmptyGroupError: If a group is empty and the policy is RAISE
    """
    policy = EmptyGroupPolicy(empty_group_policy)
    if policy is EmptyGroupPolicy.RESEED and (rng is None or bounding_box is None):
        raise ConfigurationError("Reseeding empty groups needs an rng and a bounding box")

    recalculated = []
    for index, group in enumerate(groups):
        if group.points:
            lat = float(np.mean([point.lat for point in group.points]))
            lng = float(np.mean([point.lng for point in group.points]))
        elif policy is EmptyGroupPolicy.RAISE:
            raise EmptyGroupError(group_index=index)
        elif policy is EmptyGroupPolicy.RESEED:
            seed = _random_point(rng, bounding_box, precision)
            lat, lng = seed.lat, seed.lng
            logger.warning(f"Group {index} is empty, reseeded at ({lat}, {lng})")
        else:
            lat, lng = group.lat, group.lng
            logger.warning(f"Group {index} is empty, keeping centroid ({lat}, {lng})")
        recalculated.append(group.model_copy(update={"lat": lat, "lng": lng}))
    return recalculated


def reset_group_points(groups: Sequence[Group]) -> List[Group]:
    """Return the groups with their member lists emptied."""
    return [group.model_copy(update={"points": []}) for group in groups]


def have_means_converged(
    old_groups: Sequence[Group],
    new_groups: Sequence[Group],
    tolerance: Optional[float] = None,
) -> bool:
    """Whether every centroid is unchanged from the previous iteration.

    Groups are compared by position. Without a tolerance the comparison is
    exact equality; with one, each coordinate may move by at most
    ``tolerance``.

    Args:
        old_groups: Groups before the iteration
        new_groups: Groups after the iteration
        tolerance: Absolute tolerance per coordinate (None for exact equality)

    Returns:
        bool: True if the centroids have converged
    """
    if len(old_groups) != len(new_groups):
        return False
    if tolerance is None:
        return all(
            points_match(old, new) for old, new in zip(old_groups, new_groups)
        )
    return all(
        math.isclose(old.lat, new.lat, rel_tol=0.0, abs_tol=tolerance)
        and math.isclose(old.lng, new.lng, rel_tol=0.0, abs_tol=tolerance)
        for old, new in zip(old_groups, new_groups)
    )


def inertia(groups: Sequence[Group]) -> float:
    """Sum of squared distances from each member to its group's centroid."""
    return float(
        sum(distance(point, group) ** 2 for group in groups for point in group.points)
    )
