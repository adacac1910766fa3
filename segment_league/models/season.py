"""Database models for seasons and their weeks."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.config import DEFAULT_MULTIPLIER
from ..core.time import utcnow


class Season(SQLModel, table=True):
    """Named competition period covering ``[start_at, end_at)``."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str
    start_at: int
    end_at: int
    created_at: datetime = ORMField(default_factory=utcnow)


class Week(SQLModel, table=True):
    """One competition round on a single segment."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    season_id: int = ORMField(foreign_key="season.id", index=True)
    name: str
    segment_id: str = ORMField(foreign_key="segment.id", index=True)
    required_laps: int = 1
    start_at: int
    end_at: int
    multiplier: int = DEFAULT_MULTIPLIER
    notes: str = ""
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Season", "Week"]
