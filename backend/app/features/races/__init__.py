"""Races feature module: stored races and their courses."""

from .models import Race
from .repository import RaceRepository

__all__ = [
    "Race",
    "RaceRepository",
]
