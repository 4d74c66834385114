"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.

Coordinates follow the GeoJSON convention: (longitude, latitude).
"""
import math
from typing import Sequence

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0

# (lon, lat) in decimal degrees, WGS84
Coordinate = tuple[float, float]


def haversine(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance(point_a: Sequence[float], point_b: Sequence[float]) -> float:
    """
    Distance in kilometers between two (lon, lat) coordinates.

    Out-of-range values are not validated.
    """
    lon1, lat1 = point_a[0], point_a[1]
    lon2, lat2 = point_b[0], point_b[1]
    return haversine(lat1, lon1, lat2, lon2)


def calculate_total_distance(coordinates: Sequence[Sequence[float]]) -> float:
    """
    Calculate total distance for a route.

    Args:
        coordinates: Ordered (lon, lat) pairs

    Returns:
        Total distance in kilometers (0 for fewer than two points)
    """
    total = 0.0

    for i in range(1, len(coordinates)):
        total += distance(coordinates[i - 1], coordinates[i])

    return total
