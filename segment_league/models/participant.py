"""Database model for competition participants."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class Participant(SQLModel, table=True):
    """Club member identified by their external athlete id."""

    id: str = ORMField(primary_key=True)
    name: str
    active: bool = True
    created_at: datetime = ORMField(default_factory=utcnow)


__all__ = ["Participant"]
