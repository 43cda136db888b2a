# delivery_kmeans/core/models/spatial/__init__.py
"""Spatial models package."""

from delivery_kmeans.core.models.spatial.bounds import BoundingBox
from delivery_kmeans.core.models.spatial.group import Group
from delivery_kmeans.core.models.spatial.point import Point

__all__ = ["BoundingBox", "Group", "Point"]
