"""Point model for spatial clustering."""

# Third Party Imports
from pydantic import BaseModel, ConfigDict, Field


class Point(BaseModel):
    """A delivery location on the (planar) lat/lng plane.

    Points are frozen so that two points with the same coordinates are equal
    and hash the same, which is what group membership lookups rely on.

    Attributes:
        lat: Latitude of the location
        lng: Longitude of the location
    """

    model_config = ConfigDict(frozen=True)

    lat: float = Field(allow_inf_nan=False, description="Latitude of the location.")
    lng: float = Field(allow_inf_nan=False, description="Longitude of the location.")

    def __str__(self) -> str:
        return f"({self.lat}, {self.lng})"
