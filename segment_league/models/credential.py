"""Database model for participant OAuth credentials."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class ParticipantToken(SQLModel, table=True):
    """Persists a participant's Strava OAuth credentials."""

    __tablename__ = "participant_token"

    participant_id: str = ORMField(foreign_key="participant.id", primary_key=True)
    access_token: str
    refresh_token: str
    expires_at: int
    scope: Optional[str] = None
    created_at: datetime = ORMField(default_factory=utcnow)
    updated_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["ParticipantToken"]
