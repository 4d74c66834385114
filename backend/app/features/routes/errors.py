"""
Route file parsing errors.

All errors derive from RouteParseError so API handlers can map
the whole family to a 400 response.
"""


class RouteParseError(Exception):
    """Base route parsing error."""
    pass


class FormatError(RouteParseError):
    """Document is not parseable as the expected structure."""
    pass


class EmptyRouteError(RouteParseError):
    """Well-formed document without any usable points."""
    pass


class UnsupportedFormatError(RouteParseError):
    """File type is unknown or recognized but not implemented."""
    pass
