"""
Race model.

Stores a race with its route geometry and elevation profile.
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Float, Integer, JSON
import uuid

from app.models.base import Base


class Race(Base):
    """
    Race with its course.

    route_geometry is a GeoJSON LineString-like dict:
    {"type": "LineString", "coordinates": [[lon, lat], ...]}.
    elevation_data is index-aligned with the coordinates.
    """

    __tablename__ = "races"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=True)

    # Course
    distance_km = Column(Float, nullable=True)
    route_geometry = Column(JSON, nullable=True)

    # Elevation (filled by the elevation backfill)
    elevation_data = Column(JSON, nullable=True)
    elevation_gain_m = Column(Integer, nullable=True)
    elevation_loss_m = Column(Integer, nullable=True)
    min_elevation_m = Column(Integer, nullable=True)
    max_elevation_m = Column(Integer, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Race {self.id} ({self.name})>"
