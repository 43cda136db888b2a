"""Visualization utilities package."""

from delivery_kmeans.utils.visualization.clustering import plot_groups

__all__ = ["plot_groups"]
