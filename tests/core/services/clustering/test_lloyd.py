"""Tests for the individual steps of Lloyd's algorithm."""

import numpy as np
import pytest

from delivery_kmeans.core.exceptions.clustering import (
    ConfigurationError,
    EmptyGroupError,
)
from delivery_kmeans.core.models.spatial import BoundingBox, Group, Point
from delivery_kmeans.core.services.clustering.lloyd import (
    assign_points_to_groups,
    distance,
    generate_points,
    have_means_converged,
    inertia,
    initialize_groups,
    nearest_group_index,
    points_match,
    recalculate_group_means,
    reset_group_points,
)
from delivery_kmeans.utils.constants import EmptyGroupPolicy


class TestDistance:
    def test_pythagoras(self):
        assert distance(Point(lat=0.0, lng=0.0), Point(lat=3.0, lng=4.0)) == 5.0

    def test_symmetric_and_zero_on_self(self, rng):
        points = generate_points(20, BoundingBox(), rng)
        for a in points:
            assert distance(a, a) == 0.0
            for b in points:
                assert distance(a, b) == distance(b, a)

    def test_accepts_groups(self):
        assert distance(Group(lat=1.0, lng=1.0), Point(lat=1.0, lng=2.0)) == 1.0


def test_points_match():
    assert points_match(Point(lat=1.0, lng=2.0), Group(lat=1.0, lng=2.0))
    assert not points_match(Point(lat=1.0, lng=2.0), Point(lat=2.0, lng=1.0))


class TestGeneratePoints:
    def test_count_and_bounds(self, rng):
        box = BoundingBox()
        points = generate_points(30, box, rng, precision=4)
        assert len(points) == 30
        assert all(box.contains(point) for point in points)

    def test_rounded_to_precision(self, rng):
        points = generate_points(30, BoundingBox(), rng, precision=4)
        for point in points:
            assert round(point.lat, 4) == point.lat
            assert round(point.lng, 4) == point.lng

    def test_rounding_stays_inside_box(self, rng):
        box = BoundingBox(min_lat=0.12345, max_lat=0.12349, min_lng=0.0, max_lng=1.0)
        points = generate_points(200, box, rng, precision=4)
        assert all(box.contains(point) for point in points)

    def test_same_seed_same_points(self):
        box = BoundingBox()
        first = generate_points(10, box, np.random.default_rng(3))
        second = generate_points(10, box, np.random.default_rng(3))
        assert first == second

    def test_degenerate_box(self, rng):
        box = BoundingBox(min_lat=2.0, max_lat=2.0, min_lng=3.0, max_lng=3.0)
        points = generate_points(5, box, rng)
        assert set(points) == {Point(lat=2.0, lng=3.0)}

    def test_rejects_zero_points(self, rng):
        with pytest.raises(ConfigurationError):
            generate_points(0, BoundingBox(), rng)


class TestInitializeGroups:
    def test_centroids_inside_points_box(self, rng):
        points = generate_points(30, BoundingBox(), rng)
        groups = initialize_groups(3, points, rng)
        box = BoundingBox.enclosing(points)
        assert len(groups) == 3
        for group in groups:
            assert box.contains(group.centroid)
            assert group.points == []

    def test_rejects_empty_points(self, rng):
        with pytest.raises(ConfigurationError):
            initialize_groups(3, [], rng)

    def test_rejects_non_positive_group_count(self, rng, two_cluster_points):
        with pytest.raises(ConfigurationError):
            initialize_groups(0, two_cluster_points, rng)


class TestAssignPointsToGroups:
    def test_assigns_to_nearest(self, two_cluster_points, two_cluster_groups):
        groups = assign_points_to_groups(two_cluster_points, two_cluster_groups)
        assert groups[0].points == two_cluster_points[:2]
        assert groups[1].points == two_cluster_points[2:]

    def test_does_not_mutate_input(self, two_cluster_points, two_cluster_groups):
        assign_points_to_groups(two_cluster_points, two_cluster_groups)
        assert all(group.points == [] for group in two_cluster_groups)

    def test_tie_goes_to_first_group(self):
        groups = [Group(lat=0.0, lng=0.0), Group(lat=10.0, lng=0.0)]
        point = Point(lat=5.0, lng=0.0)
        assert nearest_group_index(point, groups) == 0
        assigned = assign_points_to_groups([point], groups)
        assert assigned[0].points == [point]
        assert assigned[1].points == []

    def test_duplicate_points_are_kept(self):
        point = Point(lat=1.0, lng=1.0)
        groups = assign_points_to_groups([point, point], [Group(lat=0.0, lng=0.0)])
        assert groups[0].points == [point, point]


class TestRecalculateGroupMeans:
    def test_means(self, two_cluster_points, two_cluster_groups):
        groups = assign_points_to_groups(two_cluster_points, two_cluster_groups)
        groups = recalculate_group_means(groups)
        assert groups[0].centroid == Point(lat=0.0, lng=0.5)
        assert groups[1].centroid == Point(lat=10.0, lng=0.5)
        assert groups[0].points == two_cluster_points[:2]

    def test_empty_group_keeps_centroid(self):
        groups = recalculate_group_means([Group(lat=4.0, lng=2.0)])
        assert groups[0].centroid == Point(lat=4.0, lng=2.0)

    def test_empty_group_is_reseeded_inside_box(self, rng):
        box = BoundingBox(min_lat=0.0, max_lat=1.0, min_lng=0.0, max_lng=1.0)
        groups = recalculate_group_means(
            [Group(lat=40.0, lng=20.0)],
            empty_group_policy=EmptyGroupPolicy.RESEED,
            rng=rng,
            bounding_box=box,
        )
        assert box.contains(groups[0].centroid)

    def test_reseed_is_deterministic(self):
        box = BoundingBox(min_lat=0.0, max_lat=1.0, min_lng=0.0, max_lng=1.0)
        results = [
            recalculate_group_means(
                [Group(lat=40.0, lng=20.0)],
                empty_group_policy="reseed",
                rng=np.random.default_rng(11),
                bounding_box=box,
            )[0].centroid
            for _ in range(2)
        ]
        assert results[0] == results[1]

    def test_reseed_needs_rng_and_box(self):
        with pytest.raises(ConfigurationError):
            recalculate_group_means(
                [Group(lat=0.0, lng=0.0)], empty_group_policy=EmptyGroupPolicy.RESEED
            )

    def test_empty_group_raises(self):
        groups = [Group(lat=0.0, lng=0.0, points=[Point(lat=1.0, lng=1.0)])]
        groups.append(Group(lat=5.0, lng=5.0))
        with pytest.raises(EmptyGroupError) as excinfo:
            recalculate_group_means(groups, empty_group_policy=EmptyGroupPolicy.RAISE)
        assert excinfo.value.group_index == 1


def test_reset_group_points(two_cluster_points, two_cluster_groups):
    groups = assign_points_to_groups(two_cluster_points, two_cluster_groups)
    reset = reset_group_points(groups)
    assert all(group.points == [] for group in reset)
    assert [g.centroid for g in reset] == [g.centroid for g in groups]
    assert groups[0].points


class TestHaveMeansConverged:
    def test_exact_equality(self):
        old = [Group(lat=0.1, lng=0.2)]
        assert have_means_converged(old, [Group(lat=0.1, lng=0.2)])
        assert not have_means_converged(old, [Group(lat=0.1 + 1e-15, lng=0.2)])

    def test_ignores_members(self):
        old = [Group(lat=0.0, lng=0.0)]
        new = [Group(lat=0.0, lng=0.0, points=[Point(lat=1.0, lng=1.0)])]
        assert have_means_converged(old, new)

    def test_compares_by_position(self):
        a, b = Group(lat=0.0, lng=0.0), Group(lat=1.0, lng=1.0)
        assert not have_means_converged([a, b], [b, a])

    def test_tolerance(self):
        old = [Group(lat=0.1, lng=0.2)]
        new = [Group(lat=0.1 + 1e-9, lng=0.2)]
        assert not have_means_converged(old, new)
        assert have_means_converged(old, new, tolerance=1e-6)

    def test_length_mismatch(self):
        assert not have_means_converged([Group(lat=0.0, lng=0.0)], [])


def test_inertia(two_cluster_points, two_cluster_groups):
    groups = assign_points_to_groups(two_cluster_points, two_cluster_groups)
    groups = recalculate_group_means(groups)
    assert inertia(groups) == pytest.approx(4 * 0.25)
