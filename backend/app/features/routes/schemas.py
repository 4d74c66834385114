"""
Route-related schemas.

Pydantic models handed across the API boundary.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class RouteElevationStats(BaseModel):
    """Elevation statistics in whole meters."""

    model_config = ConfigDict(frozen=True)

    total_elevation_gain_m: int
    total_elevation_loss_m: int
    min_elevation_m: int
    max_elevation_m: int


class ParsedRoute(BaseModel):
    """
    Result of parsing a route file.

    Coordinates are (lon, lat) pairs, GeoJSON LineString order.
    """

    model_config = ConfigDict(frozen=True)

    coordinates: list[tuple[float, float]]
    total_distance_km: float
    name: Optional[str] = None

    # Elevation recorded in the file itself (only when any value is non-zero)
    elevations: Optional[list[float]] = None
    elevation_stats: Optional[RouteElevationStats] = None

    # Points whose lat/lon was missing or non-numeric and defaulted to 0
    invalid_point_count: int = 0

    @property
    def points_count(self) -> int:
        return len(self.coordinates)


class ClosestPoint(BaseModel):
    """Closest route point to a location."""

    index: int
    distance_from_start_km: float
