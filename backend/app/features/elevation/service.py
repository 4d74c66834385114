"""
Elevation profile service.

Gets an elevation profile for a route of any length while keeping the
number of points sent to the elevation API bounded:

1. Downsample coordinates to at most max_points (endpoints kept)
2. Look up elevations for the reduced set
3. Interpolate back to the original point count
"""

import logging
from typing import Optional, Sequence

from app.config import settings
from app.shared.elevation import ElevationStats, compute_elevation_stats
from app.shared.resampling import downsample, interpolate

from .client import ElevationClient
from .models import ElevationProfile

logger = logging.getLogger(__name__)


class ElevationProfileService:
    """
    Cost-bounded elevation profiles and statistics.

    Usage:
        service = ElevationProfileService(ElevationClient())
        elevations = await service.fetch_elevations_optimized(coordinates)
        stats = service.compute_stats(elevations)
    """

    def __init__(
        self,
        client: Optional[ElevationClient] = None,
        max_points: Optional[int] = None,
    ):
        self.client = client or ElevationClient()
        self.max_points = (
            settings.elevation_max_points if max_points is None else max_points
        )

    async def fetch_elevations_optimized(
        self,
        coordinates: Sequence[Sequence[float]],
        max_points: Optional[int] = None,
    ) -> list[float]:
        """Elevations for every coordinate, looked up on at most max_points."""
        profile = await self.fetch_profile(coordinates, max_points)
        return profile.elevations

    async def fetch_profile(
        self,
        coordinates: Sequence[Sequence[float]],
        max_points: Optional[int] = None,
    ) -> ElevationProfile:
        """
        Same lookup as fetch_elevations_optimized, keeping fallback counts.

        Returns:
            ElevationProfile with len(elevations) == len(coordinates)
        """
        original_count = len(coordinates)
        sampled = downsample(coordinates, max_points or self.max_points)

        series = await self.client.fetch_elevation_series(sampled)

        if series.is_degraded:
            logger.warning(
                f"Elevation lookup degraded: {series.fallback_count}/{len(sampled)} "
                f"sampled points zero-filled"
            )

        if len(sampled) != original_count:
            elevations = list(interpolate(series.elevations, original_count))
        else:
            elevations = series.elevations

        return ElevationProfile(
            elevations=elevations,
            sampled_count=len(sampled),
            fallback_count=series.fallback_count,
        )

    @staticmethod
    def compute_stats(elevations: Sequence[float]) -> ElevationStats:
        """Smoothed, threshold-filtered gain/loss and min/max."""
        return compute_elevation_stats(elevations)
