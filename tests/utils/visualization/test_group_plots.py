"""Tests for the clustering visualization utilities."""

import matplotlib.pyplot as plt

from delivery_kmeans.core.models.spatial import Group, Point
from delivery_kmeans.utils.visualization import plot_groups


def test_plot_groups_draws_members_and_centroids(two_cluster_points):
    groups = [
        Group(lat=0.0, lng=0.5, points=two_cluster_points[:2]),
        Group(lat=10.0, lng=0.5, points=two_cluster_points[2:]),
    ]
    fig = plot_groups(groups, points=two_cluster_points, title="Two pairs")
    ax = fig.axes[0]
    # one member scatter and one centroid scatter per group
    assert len(ax.collections) == 4
    assert ax.get_title() == "Two pairs"
    plt.close(fig)


def test_plot_groups_marks_unassigned_points(two_cluster_points):
    groups = [Group(lat=0.0, lng=0.5, points=two_cluster_points[:2])]
    fig = plot_groups(groups, points=two_cluster_points)
    labels = [text.get_text() for text in fig.axes[0].get_legend().get_texts()]
    assert "Unassigned" in labels
    plt.close(fig)


def test_plot_groups_saves_figure(tmp_path, two_cluster_points):
    output = tmp_path / "groups.png"
    groups = [Group(lat=0.0, lng=0.5, points=two_cluster_points)]
    fig = plot_groups(groups, output_path=str(output))
    assert output.exists()
    plt.close(fig)


def test_plot_groups_handles_empty_group():
    fig = plot_groups([Group(lat=1.0, lng=1.0)], points=[Point(lat=1.0, lng=1.0)])
    assert fig.axes
    plt.close(fig)
