"""
Database Models

Shared declarative base. Feature models live in their feature modules:
    from app.features.races.models import Race
"""

from app.models.base import Base

__all__ = ["Base"]
