"""
Route Parser Service

Parses route files (GPX) into an ordered (lon, lat) coordinate sequence
with total distance, name and file elevations.
"""

import logging
import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import List, Optional, Union

import gpxpy
import gpxpy.gpx

from app.shared.elevation import compute_elevation_stats
from app.shared.geo import calculate_total_distance

from .errors import EmptyRouteError, FormatError, UnsupportedFormatError
from .schemas import ParsedRoute, RouteElevationStats

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("gpx", "fit")


@dataclass
class _RawPoint:
    """Point as read from the file, before conversion."""
    lon: float
    lat: float
    elevation: float
    valid: bool = True


@dataclass
class _RawDocument:
    points: List[_RawPoint]
    name: Optional[str]


class RouteParserService:
    """Service for parsing route files."""

    @staticmethod
    def parse_file(filename: str, content: Union[bytes, str]) -> ParsedRoute:
        """
        Detect file type by extension and parse accordingly.

        Raises:
            UnsupportedFormatError: Unknown extension or FIT file
        """
        extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""

        if extension == "gpx":
            return RouteParserService.parse_gpx(content)
        if extension == "fit":
            return RouteParserService.parse_fit(content)

        raise UnsupportedFormatError(
            f"Unsupported file type: {extension or filename}. "
            "Please upload a GPX or FIT file."
        )

    @staticmethod
    def parse_fit(content: Union[bytes, str]) -> ParsedRoute:
        """FIT is a binary format and is not supported yet."""
        raise UnsupportedFormatError(
            "FIT file parsing not yet implemented. Please use GPX files for now."
        )

    @staticmethod
    def parse_gpx(content: Union[bytes, str]) -> ParsedRoute:
        """
        Parse GPX content and extract route information.

        Track points are used when present, route points otherwise.
        Points with a missing or non-numeric lat/lon are kept with 0
        substituted and counted in invalid_point_count.

        Args:
            content: GPX file content

        Returns:
            ParsedRoute with (lon, lat) coordinates

        Raises:
            FormatError: If the document is not well-formed XML
            EmptyRouteError: If it has no track or route points
        """
        document = None
        text = content
        if isinstance(content, bytes):
            try:
                text = content.decode("utf-8")
            except UnicodeDecodeError:
                # non-UTF-8 bytes are decoded per the XML declaration
                logger.info("GPX is not UTF-8, reading with its declared encoding")
                document = _read_leniently(content)

        if document is None:
            try:
                document = _read_with_gpxpy(text)
            except gpxpy.gpx.GPXXMLSyntaxException as e:
                logger.error(f"Failed to parse GPX: {e}")
                raise FormatError("Invalid GPX file format") from e
            except (gpxpy.gpx.GPXException, ValueError) as e:
                # gpxpy rejects bad lat/lon attributes; re-read leniently
                logger.warning(f"GPX has invalid point attributes, reading leniently: {e}")
                document = _read_leniently(text)

        if not document.points:
            raise EmptyRouteError("No route or track points found in GPX file")

        invalid_count = sum(1 for p in document.points if not p.valid)
        if invalid_count:
            logger.warning(
                f"{invalid_count} of {len(document.points)} GPX points had "
                f"missing or non-numeric coordinates, defaulted to 0"
            )

        coordinates = [(p.lon, p.lat) for p in document.points]
        elevations = [p.elevation for p in document.points]
        has_elevation = any(e != 0 for e in elevations)

        elevation_stats = None
        if has_elevation:
            stats = compute_elevation_stats(elevations)
            elevation_stats = RouteElevationStats(**stats.to_dict())

        return ParsedRoute(
            coordinates=coordinates,
            total_distance_km=calculate_total_distance(coordinates),
            name=document.name,
            elevations=elevations if has_elevation else None,
            elevation_stats=elevation_stats,
            invalid_point_count=invalid_count,
        )


def _read_with_gpxpy(text: str) -> _RawDocument:
    """Strict read via gpxpy."""
    gpx = gpxpy.parse(text)

    points: List[_RawPoint] = []
    for track in gpx.tracks:
        for segment in track.segments:
            for point in segment.points:
                points.append(_from_gpxpy_point(point))

    if not points:
        for route in gpx.routes:
            for point in route.points:
                points.append(_from_gpxpy_point(point))

    name = next((t.name for t in gpx.tracks if t.name), None)
    if name is None:
        name = next((r.name for r in gpx.routes if r.name), None)

    return _RawDocument(points=points, name=name)


def _from_gpxpy_point(point) -> _RawPoint:
    lat = _to_float(point.latitude)
    lon = _to_float(point.longitude)
    return _RawPoint(
        lon=lon if lon is not None else 0.0,
        lat=lat if lat is not None else 0.0,
        elevation=point.elevation if point.elevation else 0.0,
        valid=lat is not None and lon is not None,
    )


def _read_leniently(content: Union[bytes, str]) -> _RawDocument:
    """
    Namespace-agnostic ElementTree read that never rejects a point.

    Also reads non-UTF-8 documents, since ElementTree honours the
    encoding named in the XML declaration when given bytes.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise FormatError("Invalid GPX file format") from e

    track_points: List[_RawPoint] = []
    route_points: List[_RawPoint] = []
    track_name = None
    route_name = None

    for element in root.iter():
        tag = _local_name(element.tag)
        if tag == "trkpt":
            track_points.append(_from_element(element))
        elif tag == "rtept":
            route_points.append(_from_element(element))
        elif tag == "trk" and track_name is None:
            track_name = _child_text(element, "name")
        elif tag == "rte" and route_name is None:
            route_name = _child_text(element, "name")

    return _RawDocument(
        points=track_points or route_points,
        name=track_name or route_name,
    )


def _from_element(element: ET.Element) -> _RawPoint:
    lat = _to_float(element.get("lat"))
    lon = _to_float(element.get("lon"))
    elevation = _to_float(_child_text(element, "ele"))
    return _RawPoint(
        lon=lon if lon is not None else 0.0,
        lat=lat if lat is not None else 0.0,
        elevation=elevation if elevation is not None else 0.0,
        valid=lat is not None and lon is not None,
    )


def _child_text(element: ET.Element, name: str) -> Optional[str]:
    for child in element:
        if _local_name(child.tag) == name:
            text = (child.text or "").strip()
            return text or None
    return None


def _local_name(tag) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _to_float(value) -> Optional[float]:
    """Parse a finite float, None if missing or not numeric."""
    if value is None:
        return None
    try:
        result = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result
