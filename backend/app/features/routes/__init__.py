"""
Route file handling module.

Usage:
    from app.features.routes import RouteParserService, ParsedRoute
    from app.features.routes import distance_from_start, find_closest_point

Components:
- RouteParserService: Parse GPX files into (lon, lat) coordinates + distance
- distance_from_start / find_closest_point: Position lookups along a route
- ParsedRoute: Pydantic schema for a parsed route
- FormatError / EmptyRouteError / UnsupportedFormatError: parse failures
"""

from .errors import (
    RouteParseError,
    FormatError,
    EmptyRouteError,
    UnsupportedFormatError,
)
from .geometry import distance_from_start, find_closest_point
from .parser import RouteParserService, SUPPORTED_EXTENSIONS
from .schemas import ClosestPoint, ParsedRoute, RouteElevationStats

__all__ = [
    # Services
    "RouteParserService",
    "SUPPORTED_EXTENSIONS",
    "distance_from_start",
    "find_closest_point",
    # Schemas
    "ParsedRoute",
    "RouteElevationStats",
    "ClosestPoint",
    # Errors
    "RouteParseError",
    "FormatError",
    "EmptyRouteError",
    "UnsupportedFormatError",
]
