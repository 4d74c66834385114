"""
Elevation feature module: API lookups, profiles, statistics, backfill.

Usage:
    from app.features.elevation import ElevationClient, ElevationProfileService
    from app.features.elevation import ElevationBackfillService
"""

from .client import ElevationClient, ElevationClientConfig
from .service import ElevationProfileService
from .backfill import ElevationBackfillService, ALREADY_EXISTS_MESSAGE
from .errors import ElevationError, ElevationAPIError, PersistenceError
from .models import (
    ElevationSource,
    ElevationSeries,
    ElevationProfile,
    BackfillStatus,
    BackfillProgress,
    BackfillResult,
    RouteElevationStatus,
    RouteRecord,
    RouteStore,
)

__all__ = [
    # Services
    "ElevationClient",
    "ElevationClientConfig",
    "ElevationProfileService",
    "ElevationBackfillService",
    "ALREADY_EXISTS_MESSAGE",
    # Errors
    "ElevationError",
    "ElevationAPIError",
    "PersistenceError",
    # Models
    "ElevationSource",
    "ElevationSeries",
    "ElevationProfile",
    "BackfillStatus",
    "BackfillProgress",
    "BackfillResult",
    "RouteElevationStatus",
    "RouteRecord",
    "RouteStore",
]
