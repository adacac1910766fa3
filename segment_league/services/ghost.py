"""Previous-attempt comparison for the weekly leaderboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from sqlmodel import Session, select

from ..models import Activity, Result
from .queries import load_previous_comparable_week, load_week
from .records import WeekInfo


@dataclass(frozen=True)
class GhostData:
    previous_week_id: int
    previous_week_name: str
    previous_time_seconds: int
    external_activity_id: Optional[str] = None

    def diff(self, total_time_seconds: int) -> int:
        """Seconds slower (positive) or faster (negative) than last time."""

        return total_time_seconds - self.previous_time_seconds


def ghost_map_for(session: Session, week: WeekInfo) -> Dict[str, GhostData]:
    previous = load_previous_comparable_week(session, week)
    if previous is None:
        return {}

    rows = session.exec(
        select(Result, Activity)
        .join(Activity, Activity.id == Result.activity_id, isouter=True)
        .where(Result.week_id == previous.id)
    ).all()
    return {
        result.participant_id: GhostData(
            previous_week_id=previous.id,
            previous_week_name=previous.name,
            previous_time_seconds=result.total_time_seconds,
            external_activity_id=activity.external_id if activity else None,
        )
        for result, activity in rows
    }


def get_ghost_map(session: Session, week_id: int) -> Dict[str, GhostData]:
    """Participant id -> their result in the latest comparable earlier week."""

    return ghost_map_for(session, load_week(session, week_id))


def get_ghost(session: Session, week_id: int, participant_id: str) -> Optional[GhostData]:
    return get_ghost_map(session, week_id).get(participant_id)


__all__ = ["GhostData", "get_ghost", "get_ghost_map", "ghost_map_for"]
