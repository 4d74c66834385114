"""
Race repository.

Data access for races; also the store behind the elevation backfill.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.elevation import ElevationStats
from app.shared.repository import BaseRepository
from .models import Race

logger = logging.getLogger(__name__)


class RaceRepository(BaseRepository[Race]):
    """Repository for Race operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Race)

    async def list_routes(self) -> list[Race]:
        """
        All races, oldest first.

        The returned races are detached from the session, so they stay
        readable after a failed update rolls the session back.
        """
        result = await self.db.execute(
            select(Race).order_by(Race.created_at.asc())
        )
        races = list(result.scalars().all())
        for race in races:
            self.db.expunge(race)
        return races

    async def update_elevation(
        self,
        route_id: str,
        elevations: list[float],
        stats: ElevationStats,
    ) -> Optional[Race]:
        """
        Store elevation profile and stats for a race.

        Returns:
            Updated race, or None if no race has that id

        Raises:
            SQLAlchemyError: After rolling the session back
        """
        try:
            race = await self.get_by_id(route_id)
            if race is None:
                return None

            race = await self.update(
                race,
                elevation_data=list(elevations),
                elevation_gain_m=stats.total_elevation_gain_m,
                elevation_loss_m=stats.total_elevation_loss_m,
                min_elevation_m=stats.min_elevation_m,
                max_elevation_m=stats.max_elevation_m,
            )
            await self.db.commit()
            return race
        except SQLAlchemyError as e:
            logger.error(f"Failed to store elevation for race {route_id}: {e}")
            await self.db.rollback()
            raise
