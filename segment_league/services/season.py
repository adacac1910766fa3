"""Per-week scoring across a whole season."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..core.errors import LeagueError
from ..core.logging import get_logger
from ..models import Season
from .queries import load_season, load_season_week_ids
from .scoring import WeekScoring, calculate_week_scoring

logger = get_logger(__name__)


@dataclass(frozen=True)
class SkippedWeek:
    week_id: int
    reason: str


@dataclass
class SeasonScoring:
    season: Season
    weeks: List[WeekScoring] = field(default_factory=list)
    skipped: List[SkippedWeek] = field(default_factory=list)


def score_season(session: Session, season_id: int) -> SeasonScoring:
    """Score every week of a season.

    Weeks are independent: a week whose rows cannot be scored is reported in
    ``skipped`` and left out of the totals, the other weeks still count.
    """

    season = load_season(session, season_id)
    outcome = SeasonScoring(season=season)
    for week_id in load_season_week_ids(session, season.id):
        try:
            outcome.weeks.append(calculate_week_scoring(session, week_id))
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Excluding week %s from season %s: %s", week_id, season.id, exc)
            outcome.skipped.append(SkippedWeek(week_id, f"database error: {exc}"))
        except LeagueError as exc:
            logger.error("Excluding week %s from season %s: %s", week_id, season.id, exc)
            outcome.skipped.append(SkippedWeek(week_id, str(exc)))
    return outcome


__all__ = ["SeasonScoring", "SkippedWeek", "score_season"]
