"""
CLI interface for route and elevation tools.

Usage (from backend directory):
    python -m app.cli parse path/to/route.gpx
    python -m app.cli status
    python -m app.cli backfill
    python -m app.cli backfill --force
"""

import asyncio
import logging
import sys
from pathlib import Path

import click

from app.config import settings
from app.features.elevation import (
    BackfillProgress,
    BackfillStatus,
    ElevationBackfillService,
)
from app.features.routes import RouteParserService, RouteParseError


@click.group()
def cli():
    """Route and elevation tools for Race Plan."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def parse(path: Path):
    """Parse a route file and print a summary."""
    try:
        route = RouteParserService.parse_file(path.name, path.read_bytes())
    except RouteParseError as e:
        raise click.ClickException(str(e))

    click.echo(f"Name:      {route.name or '-'}")
    click.echo(f"Points:    {route.points_count}")
    click.echo(f"Distance:  {route.total_distance_km:.2f} km")
    if route.elevation_stats:
        stats = route.elevation_stats
        click.echo(
            f"Elevation: +{stats.total_elevation_gain_m}m / -{stats.total_elevation_loss_m}m "
            f"(min {stats.min_elevation_m}m, max {stats.max_elevation_m}m)"
        )
    if route.invalid_point_count:
        click.echo(
            f"Warning:   {route.invalid_point_count} points had invalid coordinates (set to 0)",
            err=True,
        )


@cli.command()
def status():
    """Show elevation data status for all races."""
    asyncio.run(_status())


async def _status():
    from app.db.session import AsyncSessionLocal, init_db
    from app.features.races import RaceRepository

    await init_db()
    async with AsyncSessionLocal() as session:
        service = ElevationBackfillService(RaceRepository(session))
        statuses = await service.elevation_status()

    if not statuses:
        click.echo("No races found.")
        return

    for s in statuses:
        geometry = "yes" if s.has_route_geometry else "no"
        elevation = "yes" if s.has_elevation_data else "no"
        click.echo(f"{s.name:<40} geometry={geometry:<4} elevation={elevation}")


@cli.command()
@click.option("--force", is_flag=True, help="Recalculate races that already have elevation data")
def backfill(force: bool):
    """Fetch and store elevation data for all races."""
    asyncio.run(_backfill(force))


def _echo_progress(details: list[BackfillProgress]) -> None:
    current = details[-1]
    if current.status in (BackfillStatus.SUCCESS, BackfillStatus.ERROR):
        mark = "OK " if current.status is BackfillStatus.SUCCESS else "ERR"
        click.echo(f"[{mark}] {current.route_name}: {current.message}")


async def _backfill(force: bool):
    from app.db.session import AsyncSessionLocal, init_db
    from app.features.races import RaceRepository

    await init_db()
    async with AsyncSessionLocal() as session:
        service = ElevationBackfillService(RaceRepository(session))
        result = await service.process_all(force_recalculate=force, on_progress=_echo_progress)

    click.echo()
    click.echo(
        f"Total: {result.total}, updated: {result.successful}, "
        f"skipped: {result.skipped}, failed: {result.failed}"
    )
    if result.failed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
