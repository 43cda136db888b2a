"""Group model for spatial clustering."""

# Standard Library Imports
from typing import List

# Third Party Imports
from pydantic import BaseModel, Field

# Internal Imports
from delivery_kmeans.core.models.spatial.point import Point


class Group(BaseModel):
    """A k-means group: a centroid and the points currently assigned to it.

    Attributes:
        lat: Latitude of the centroid
        lng: Longitude of the centroid
        points: Points assigned to this group in the current iteration
    """

    lat: float = Field(allow_inf_nan=False, description="Latitude of the centroid.")
    lng: float = Field(allow_inf_nan=False, description="Longitude of the centroid.")
    points: List[Point] = Field(
        default_factory=list, description="The points belonging to this group."
    )

    @property
    def centroid(self) -> Point:
        """The centroid as a ``Point``."""
        return Point(lat=self.lat, lng=self.lng)

    def contains(self, point: Point) -> bool:
        """Whether a point with the same coordinates is a member of this group."""
        return any(member == point for member in self.points)

    def __len__(self) -> int:
        """Returns the number of points in the group.

        Returns:
            int: The number of points in the group.
        """
        return len(self.points)

    def __str__(self) -> str:
        return f"Group({self.lat}, {self.lng}, {len(self.points)} points)"

    def __repr__(self) -> str:
        return self.__str__()
