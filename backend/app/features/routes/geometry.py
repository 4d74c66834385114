"""
Position lookups along a route.

Used by the plan UI to place feed zones and markers on a course.
"""

from typing import Sequence

from app.shared.geo import distance, haversine

from .schemas import ClosestPoint


def distance_from_start(
    coordinates: Sequence[Sequence[float]],
    target_index: int
) -> float:
    """
    Cumulative distance (km) from the first point to target_index.

    Out-of-range indexes (<= 0 or >= len) yield 0 instead of failing.
    """
    if target_index <= 0 or target_index >= len(coordinates):
        return 0.0

    total = 0.0
    for i in range(target_index):
        total += distance(coordinates[i], coordinates[i + 1])

    return total


def find_closest_point(
    coordinates: Sequence[Sequence[float]],
    lat: float,
    lon: float
) -> ClosestPoint:
    """
    Find the route point nearest to (lat, lon) by linear scan.

    Ties resolve to the earliest index. An empty route yields index 0.
    """
    min_distance = float("inf")
    closest_index = 0

    for index, point in enumerate(coordinates):
        d = haversine(lat, lon, point[1], point[0])
        if d < min_distance:
            min_distance = d
            closest_index = index

    return ClosestPoint(
        index=closest_index,
        distance_from_start_km=distance_from_start(coordinates, closest_index),
    )
