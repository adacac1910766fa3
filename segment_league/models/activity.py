"""Database models for submitted performances and their segment efforts."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Index, UniqueConstraint
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Activity(SQLModel, table=True):
    """Performance record a participant submitted for a week."""

    __table_args__ = (Index("ix_activity_week_participant", "week_id", "participant_id"),)

    id: Optional[int] = ORMField(default=None, primary_key=True)
    week_id: int = ORMField(foreign_key="week.id")
    participant_id: str = ORMField(foreign_key="participant.id")
    external_id: str
    name: Optional[str] = None
    start_at: int
    device_name: Optional[str] = None
    created_at: datetime = ORMField(default_factory=utcnow)


class SegmentEffort(SQLModel, table=True):
    """One timed lap of the week's segment inside an activity."""

    __tablename__ = "segment_effort"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    activity_id: int = ORMField(foreign_key="activity.id", index=True)
    segment_id: str = ORMField(foreign_key="segment.id")
    external_id: Optional[str] = None
    # Position of the lap within the activity's efforts on this segment.
    effort_index: int
    elapsed_seconds: int
    start_at: int
    pr_achieved: bool = False
    average_watts: Optional[float] = None
    average_heartrate: Optional[float] = None
    average_cadence: Optional[float] = None


class Result(SQLModel, table=True):
    """Accepted outcome of a participant for a week."""

    __table_args__ = (UniqueConstraint("week_id", "participant_id", name="uq_result_week_participant"),)

    id: Optional[int] = ORMField(default=None, primary_key=True)
    week_id: int = ORMField(foreign_key="week.id", index=True)
    participant_id: str = ORMField(foreign_key="participant.id", index=True)
    activity_id: int = ORMField(foreign_key="activity.id")
    total_time_seconds: int
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Activity", "Result", "SegmentEffort"]
