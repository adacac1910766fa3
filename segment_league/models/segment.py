"""Database model for timed course segments."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Segment(SQLModel, table=True):
    """Fixed course section, keyed by its external segment id."""

    id: str = ORMField(primary_key=True)
    name: str
    distance_m: Optional[float] = None
    average_grade: Optional[float] = None
    total_elevation_gain: Optional[float] = None
    city: Optional[str] = None
    country: Optional[str] = None
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Segment"]
