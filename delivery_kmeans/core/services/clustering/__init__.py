# delivery_kmeans/core/services/clustering/__init__.py
"""Clustering services package."""

from delivery_kmeans.core.services.clustering.kmeans_service import (
    ClusterResult,
    KMeansConfig,
    KMeansService,
    run_clustering,
)

__all__ = ["ClusterResult", "KMeansConfig", "KMeansService", "run_clustering"]
