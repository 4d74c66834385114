"""
Elevation API client.

Looks up terrain elevation for (lon, lat) coordinates through an
Open-Elevation compatible endpoint:

    POST {"locations": [{"latitude": .., "longitude": ..}, ...]}
    ->   {"results": [{"latitude": .., "longitude": .., "elevation": ..}, ...]}

Open-Elevation accepts at most 1024 locations per request, so input is
split into batches. A batch that fails is replaced with zeros rather than
failing the whole lookup; callers can see which values are fallbacks via
fetch_elevation_series().
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import httpx

from app.config import settings
from .errors import ElevationAPIError
from .models import ElevationSeries, ElevationSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElevationClientConfig:
    """Connection settings for the elevation API."""

    endpoint_url: str
    max_batch_size: int = 1000
    max_retries: int = 0
    timeout_seconds: float = 30.0

    @classmethod
    def from_settings(cls) -> "ElevationClientConfig":
        return cls(
            endpoint_url=settings.elevation_api_url,
            max_batch_size=settings.elevation_max_batch_size,
            max_retries=settings.elevation_max_retries,
            timeout_seconds=settings.elevation_timeout_seconds,
        )


class ElevationClient:
    """
    Batched elevation lookups with per-batch zero-fill fallback.

    Usage:
        client = ElevationClient()
        elevations = await client.fetch_elevations([(18.0, 59.3), ...])

    An injected httpx.AsyncClient is reused and left open; otherwise a
    client is created for each lookup.
    """

    def __init__(
        self,
        config: Optional[ElevationClientConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or ElevationClientConfig.from_settings()
        if self.config.max_batch_size < 1:
            raise ValueError("max_batch_size must be >= 1")
        self._http_client = http_client

    async def fetch_elevations(self, coordinates: Sequence[Sequence[float]]) -> list[float]:
        """
        Fetch elevation (meters) for each coordinate, index-aligned.

        Failed batches come back as zeros.
        """
        series = await self.fetch_elevation_series(coordinates)
        return series.elevations

    async def fetch_elevation_series(
        self,
        coordinates: Sequence[Sequence[float]]
    ) -> ElevationSeries:
        """Fetch elevations together with a measured/fallback tag per point."""
        if not coordinates:
            return ElevationSeries()

        if self._http_client is not None:
            return await self._fetch_batches(self._http_client, coordinates)

        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            return await self._fetch_batches(client, coordinates)

    async def _fetch_batches(
        self,
        client: httpx.AsyncClient,
        coordinates: Sequence[Sequence[float]]
    ) -> ElevationSeries:
        series = ElevationSeries()
        batch_size = self.config.max_batch_size

        for start in range(0, len(coordinates), batch_size):
            batch = coordinates[start:start + batch_size]
            values = await self._fetch_batch(client, batch)

            if values is None:
                series.elevations.extend([0.0] * len(batch))
                series.sources.extend([ElevationSource.FALLBACK] * len(batch))
            else:
                series.elevations.extend(values)
                series.sources.extend([ElevationSource.MEASURED] * len(batch))

        return series

    async def _fetch_batch(
        self,
        client: httpx.AsyncClient,
        batch: Sequence[Sequence[float]]
    ) -> Optional[list[float]]:
        """
        Request one batch. Returns None when every attempt failed.
        """
        locations = [
            {"latitude": point[1], "longitude": point[0]}
            for point in batch
        ]
        attempts = 1 + self.config.max_retries

        for attempt in range(1, attempts + 1):
            logger.info(
                f"Fetching elevation for {len(locations)} points "
                f"(attempt {attempt}/{attempts})"
            )
            try:
                response = await client.post(
                    self.config.endpoint_url,
                    json={"locations": locations},
                )
                response.raise_for_status()
                values = self._parse_results(response.json(), len(batch))
                logger.info(f"Received elevation data for {len(values)} points")
                return values

            except httpx.HTTPStatusError as e:
                logger.error(
                    f"Elevation API error: {e.response.status_code} "
                    f"{e.response.text[:200]}"
                )
            except (httpx.HTTPError, ElevationAPIError, ValueError) as e:
                logger.error(f"Error fetching elevation data: {e}")

        logger.error(
            f"Elevation batch of {len(batch)} points failed, using zeros. "
            f"Sample coordinates: {list(batch[:3])}"
        )
        return None

    @staticmethod
    def _parse_results(data, expected_count: int) -> list[float]:
        try:
            results = data["results"]
            values = [float(item["elevation"]) for item in results]
        except (KeyError, TypeError, ValueError) as e:
            raise ElevationAPIError(f"Malformed elevation response: {e}") from e

        if len(values) != expected_count:
            raise ElevationAPIError(
                f"Expected {expected_count} elevations, got {len(values)}"
            )
        return values
