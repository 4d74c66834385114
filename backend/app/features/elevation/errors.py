"""
Elevation feature errors.
"""


class ElevationError(Exception):
    """Base elevation error."""
    pass


class ElevationAPIError(ElevationError):
    """Elevation API returned an unusable response."""
    pass


class PersistenceError(ElevationError):
    """Store update reported no effect."""
    pass
