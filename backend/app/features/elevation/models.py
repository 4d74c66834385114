"""Data models for elevation lookups and backfill runs (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Protocol, Sequence

from app.shared.elevation import ElevationStats


class ElevationSource(str, Enum):
    """Where a single elevation value came from."""
    MEASURED = "measured"
    FALLBACK = "fallback"  # zero-filled after a failed batch


@dataclass
class ElevationSeries:
    """Elevation values index-aligned with the requested coordinates."""

    elevations: list[float] = field(default_factory=list)
    sources: list[ElevationSource] = field(default_factory=list)

    @property
    def fallback_count(self) -> int:
        return sum(1 for s in self.sources if s is ElevationSource.FALLBACK)

    @property
    def is_degraded(self) -> bool:
        return self.fallback_count > 0


@dataclass
class ElevationProfile:
    """Full-length elevation profile for a route."""

    elevations: list[float]
    sampled_count: int  # points actually sent to the API
    fallback_count: int = 0  # sampled points that were zero-filled

    @property
    def is_degraded(self) -> bool:
        return self.fallback_count > 0


class BackfillStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class BackfillProgress:
    """Progress of one route in a backfill run. Updated in place."""

    route_id: str
    route_name: str
    status: BackfillStatus = BackfillStatus.PENDING
    message: Optional[str] = None
    progress: int = 0  # percent
    degraded: bool = False


@dataclass
class BackfillResult:
    """Aggregate outcome of a backfill run."""

    total: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    details: list[BackfillProgress] = field(default_factory=list)


@dataclass
class RouteElevationStatus:
    """Elevation data status of a stored route, for the admin overview."""

    id: str
    name: str
    slug: Optional[str]
    distance_km: Optional[float]
    has_route_geometry: bool
    has_elevation_data: bool
    elevation_gain_m: Optional[float] = None
    elevation_loss_m: Optional[float] = None


class RouteRecord(Protocol):
    """Stored route as seen by the backfill."""

    id: Any
    name: str
    route_geometry: Optional[dict]
    elevation_data: Optional[list]


class RouteStore(Protocol):
    """Persistence collaborator used by the backfill."""

    async def list_routes(self) -> Sequence[RouteRecord]:
        ...

    async def update_elevation(
        self,
        route_id: Any,
        elevations: list[float],
        stats: ElevationStats,
    ) -> Optional[RouteRecord]:
        ...
