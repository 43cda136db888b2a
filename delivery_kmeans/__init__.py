# delivery_kmeans/__init__.py
"""
Lloyd's algorithm (k-means) clustering of delivery coordinates.
"""

from delivery_kmeans.core.services.clustering import (
    ClusterResult,
    KMeansConfig,
    KMeansService,
    run_clustering,
)

__all__ = ["ClusterResult", "KMeansConfig", "KMeansService", "run_clustering"]
