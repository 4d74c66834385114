"""
Elevation Admin Routes

Endpoints for inspecting and backfilling race elevation data.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.elevation import (
    BackfillResult,
    ElevationBackfillService,
    RouteElevationStatus,
)
from app.features.races import RaceRepository

router = APIRouter()


@router.get("/status", response_model=list[RouteElevationStatus])
async def get_elevation_status(db: AsyncSession = Depends(get_async_db)):
    """List races with their route geometry / elevation data status."""
    service = ElevationBackfillService(RaceRepository(db))
    return await service.elevation_status()


@router.post("/backfill", response_model=BackfillResult)
async def run_backfill(
    force: bool = Query(False, description="Recalculate races that already have elevation data"),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Backfill elevation data for all races.

    Runs serially with a pause between races; the request stays open
    until every race has been processed.
    """
    service = ElevationBackfillService(RaceRepository(db))
    return await service.process_all(force_recalculate=force)
