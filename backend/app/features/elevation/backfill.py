"""
Elevation backfill.

Computes and stores elevation data for stored routes, one route at a time.

Flow per route:
    0%   processing started
    20%  fetching elevation (downsampled lookup)
    60%  calculating statistics
    80%  saving to database
    100% done

Routes that already have elevation data are skipped unless
force_recalculate is set, so re-running a backfill does not repeat API
calls. A failing route is recorded as an error and the run continues.
"""

import asyncio
import logging
from typing import Callable, Optional

from app.config import settings

from .errors import PersistenceError
from .models import (
    BackfillProgress,
    BackfillResult,
    BackfillStatus,
    RouteElevationStatus,
    RouteRecord,
    RouteStore,
)
from .service import ElevationProfileService

logger = logging.getLogger(__name__)

ALREADY_EXISTS_MESSAGE = "Elevation data already exists"

ProgressCallback = Callable[[BackfillProgress], None]
RunProgressCallback = Callable[[list[BackfillProgress]], None]


def _has_geometry(route: RouteRecord) -> bool:
    geometry = route.route_geometry
    return bool(geometry and geometry.get("coordinates"))


def _has_elevation(route: RouteRecord) -> bool:
    return bool(route.elevation_data)


class ElevationBackfillService:
    """
    Serial elevation backfill over a RouteStore.

    Usage:
        service = ElevationBackfillService(RaceRepository(db), ElevationProfileService())
        result = await service.process_all()

    Not safe to run twice concurrently on the same store. Without
    max_points the profile service's own lookup limit applies.
    """

    def __init__(
        self,
        store: RouteStore,
        profile_service: Optional[ElevationProfileService] = None,
        delay_seconds: Optional[float] = None,
        max_points: Optional[int] = None,
    ):
        self.store = store
        self.profile_service = profile_service or ElevationProfileService()
        self.delay_seconds = (
            settings.backfill_delay_seconds if delay_seconds is None else delay_seconds
        )
        self.max_points = max_points

    async def process_one(
        self,
        route: RouteRecord,
        force_recalculate: bool = False,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BackfillProgress:
        """
        Backfill elevation data for a single route.

        Never raises for route-level problems; the returned progress
        carries status=error and the message instead.
        """
        route_id = route.id
        route_name = route.name
        progress = BackfillProgress(
            route_id=str(route_id),
            route_name=route_name,
            status=BackfillStatus.PROCESSING,
            progress=0,
        )

        def emit(percent: Optional[int] = None, message: Optional[str] = None) -> None:
            if percent is not None:
                progress.progress = percent
            if message is not None:
                progress.message = message
            if on_progress:
                on_progress(progress)

        emit()

        try:
            if not _has_geometry(route):
                progress.status = BackfillStatus.ERROR
                emit(message="No route geometry found")
                return progress

            if not force_recalculate and _has_elevation(route):
                progress.status = BackfillStatus.SUCCESS
                emit(100, ALREADY_EXISTS_MESSAGE)
                return progress

            coordinates = route.route_geometry["coordinates"]
            verb = "Recalculating" if force_recalculate else "Fetching"
            emit(20, f"{verb} elevation for {len(coordinates)} points...")

            profile = await self.profile_service.fetch_profile(
                coordinates, self.max_points
            )
            progress.degraded = profile.is_degraded

            emit(60, "Calculating statistics...")
            stats = self.profile_service.compute_stats(profile.elevations)

            emit(80, "Saving to database...")
            logger.info(
                f"Updating route {route_id} ({route_name}) with "
                f"{len(profile.elevations)} elevation points: {stats}"
            )
            updated = await self.store.update_elevation(
                route_id, profile.elevations, stats
            )
            if not updated:
                raise PersistenceError("No record was updated")

            message = (
                f"Elevation data saved! Gain: {stats.total_elevation_gain_m}m, "
                f"Loss: {stats.total_elevation_loss_m}m"
            )
            if profile.is_degraded:
                message += (
                    f" (warning: {profile.fallback_count} of {profile.sampled_count} "
                    f"sampled points failed and were set to 0)"
                )
            progress.status = BackfillStatus.SUCCESS
            emit(100, message)
            return progress

        except Exception as e:
            logger.error(f"Backfill failed for route {route_id}: {e}")
            progress.status = BackfillStatus.ERROR
            emit(message=str(e) or e.__class__.__name__)
            return progress

    async def process_all(
        self,
        force_recalculate: bool = False,
        on_progress: Optional[RunProgressCallback] = None,
    ) -> BackfillResult:
        """
        Backfill every stored route, serially, pausing between routes.

        Errors from listing routes propagate; per-route errors are
        recorded in the result.
        """
        result = BackfillResult()

        routes = list(await self.store.list_routes())
        if not routes:
            return result

        result.total = len(routes)
        logger.info(
            f"Starting elevation backfill for {result.total} routes "
            f"(force={force_recalculate})"
        )

        def track(p: BackfillProgress) -> None:
            for index, existing in enumerate(result.details):
                if existing.route_id == p.route_id:
                    result.details[index] = p
                    break
            else:
                result.details.append(p)
            if on_progress:
                on_progress(result.details)

        for index, route in enumerate(routes):
            if index > 0 and self.delay_seconds > 0:
                await asyncio.sleep(self.delay_seconds)

            progress = await self.process_one(route, force_recalculate, track)

            if progress.status is BackfillStatus.SUCCESS:
                if progress.message and "already exists" in progress.message:
                    result.skipped += 1
                else:
                    result.successful += 1
            elif progress.status is BackfillStatus.ERROR:
                result.failed += 1

        logger.info(
            f"Elevation backfill done: {result.successful} updated, "
            f"{result.skipped} skipped, {result.failed} failed"
        )
        return result

    async def elevation_status(self) -> list[RouteElevationStatus]:
        """Elevation data status of every stored route, sorted by name."""
        routes = await self.store.list_routes()

        statuses = [
            RouteElevationStatus(
                id=str(route.id),
                name=route.name,
                slug=getattr(route, "slug", None),
                distance_km=getattr(route, "distance_km", None),
                has_route_geometry=_has_geometry(route),
                has_elevation_data=_has_elevation(route),
                elevation_gain_m=getattr(route, "elevation_gain_m", None),
                elevation_loss_m=getattr(route, "elevation_loss_m", None),
            )
            for route in routes
        ]
        return sorted(statuses, key=lambda s: s.name)
