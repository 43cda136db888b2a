"""Bounding box model for spatial clustering."""

# Standard Library Imports
from typing import Iterable

# Third Party Imports
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

# Internal Imports
from delivery_kmeans.core.exceptions.clustering import ConfigurationError
from delivery_kmeans.core.models.spatial.point import Point
from delivery_kmeans.utils.constants import (
    DEFAULT_MAX_LAT,
    DEFAULT_MAX_LNG,
    DEFAULT_MIN_LAT,
    DEFAULT_MIN_LNG,
)


class BoundingBox(BaseModel):
    """Axis-aligned rectangle ``[min_lat, max_lat] x [min_lng, max_lng]``.

    A box whose min equals its max on an axis is allowed (all points share
    that coordinate). A box whose min exceeds its max, or with a bound that is
    not a finite number, raises ``ConfigurationError``.

    Attributes:
        min_lat: Southern edge
        max_lat: Northern edge
        min_lng: Western edge
        max_lng: Eastern edge
    """

    model_config = ConfigDict(frozen=True)

    min_lat: float = Field(default=DEFAULT_MIN_LAT, allow_inf_nan=False)
    max_lat: float = Field(default=DEFAULT_MAX_LAT, allow_inf_nan=False)
    min_lng: float = Field(default=DEFAULT_MIN_LNG, allow_inf_nan=False)
    max_lng: float = Field(default=DEFAULT_MAX_LNG, allow_inf_nan=False)

    def __init__(self, **data) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid bounding box: {e}") from e

    @model_validator(mode="after")
    def _check_order(self) -> "BoundingBox":
        if self.min_lat > self.max_lat:
            raise ConfigurationError(
                f"min_lat ({self.min_lat}) is greater than max_lat ({self.max_lat})"
            )
        if self.min_lng > self.max_lng:
            raise ConfigurationError(
                f"min_lng ({self.min_lng}) is greater than max_lng ({self.max_lng})"
            )
        return self

    @classmethod
    def from_corners(
        cls, lat_a: float, lat_b: float, lng_a: float, lng_b: float
    ) -> "BoundingBox":
        """Create a box from two corners given in any order.

        Args:
            lat_a: Latitude of one corner
            lat_b: Latitude of the opposite corner
            lng_a: Longitude of one corner
            lng_b: Longitude of the opposite corner

        Returns:
            BoundingBox: The box spanning both corners
        """
        return cls(
            min_lat=min(lat_a, lat_b),
            max_lat=max(lat_a, lat_b),
            min_lng=min(lng_a, lng_b),
            max_lng=max(lng_a, lng_b),
        )

    @classmethod
    def enclosing(cls, points: Iterable[Point]) -> "BoundingBox":
        """Smallest box containing every point.

        Raises:
            ConfigurationError: If there are no points
        """
        points = list(points)
        if not points:
            raise ConfigurationError("Cannot compute the bounding box of no points")
        lats = [point.lat for point in points]
        lngs = [point.lng for point in points]
        return cls(
            min_lat=min(lats), max_lat=max(lats), min_lng=min(lngs), max_lng=max(lngs)
        )

    def contains(self, point: Point) -> bool:
        """Whether the point lies inside the box (edges included)."""
        return (
            self.min_lat <= point.lat <= self.max_lat
            and self.min_lng <= point.lng <= self.max_lng
        )
