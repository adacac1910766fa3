"""Climb and flat jersey tallies.

A week is a climb when its segment's average grade is above
``CLIMB_GRADE_THRESHOLD`` percent, otherwise it is flat. The fastest
finisher of a week takes that week's category win, and the season jersey of
a category goes to whoever collected the most wins. Champions are only
named once the season is closed; while it runs only the tallies are shown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlmodel import Session

from ..core.config import CLIMB_GRADE_THRESHOLD
from .scoring import WeekScoring
from .season import SkippedWeek, score_season
from .windows import SeasonStatus, season_status


class WeekCategory(str, Enum):
    CLIMB = "climb"
    FLAT = "flat"


def classify_week(average_grade: Optional[float]) -> WeekCategory:
    if (average_grade or 0) > CLIMB_GRADE_THRESHOLD:
        return WeekCategory.CLIMB
    return WeekCategory.FLAT


@dataclass(frozen=True)
class CategoryWins:
    participant_id: str
    name: str
    wins: int


@dataclass(frozen=True)
class CategoryJersey:
    category: WeekCategory
    week_count: int
    tallies: Tuple[CategoryWins, ...]
    leaders: Tuple[CategoryWins, ...]
    champion: Optional[CategoryWins] = None


@dataclass
class SeasonJerseys:
    season_id: int
    status: SeasonStatus
    categories: Dict[WeekCategory, CategoryJersey] = field(default_factory=dict)
    skipped_weeks: List[SkippedWeek] = field(default_factory=list)


def tally_category_wins(
    weeks: Iterable[WeekScoring],
) -> Tuple[Dict[WeekCategory, Dict[str, CategoryWins]], Dict[WeekCategory, int]]:
    """Count weekly wins per category; also returns how many weeks each category had."""

    tallies: Dict[WeekCategory, Dict[str, CategoryWins]] = {category: {} for category in WeekCategory}
    week_counts: Dict[WeekCategory, int] = {category: 0 for category in WeekCategory}
    for week in weeks:
        category = classify_week(week.week.average_grade)
        week_counts[category] += 1
        winner = week.winner
        if winner is None:
            continue
        current = tallies[category].get(winner.participant_id)
        tallies[category][winner.participant_id] = CategoryWins(
            participant_id=winner.participant_id,
            name=current.name if current else winner.participant_name,
            wins=(current.wins if current else 0) + 1,
        )
    return tallies, week_counts


def build_jerseys(weeks: Iterable[WeekScoring], closed: bool) -> Dict[WeekCategory, CategoryJersey]:
    """Rank win tallies per category.

    A tie on the top win count names no champion, rather than the first
    participant to reach that count; every tied participant is a leader.
    """

    tallies, week_counts = tally_category_wins(weeks)
    jerseys: Dict[WeekCategory, CategoryJersey] = {}
    for category in WeekCategory:
        ordered = tuple(
            sorted(tallies[category].values(), key=lambda item: (-item.wins, item.participant_id))
        )
        top = ordered[0].wins if ordered else 0
        leaders = tuple(item for item in ordered if item.wins == top and top > 0)
        # Equal win counts have no agreed tie-break, so no champion is named.
        champion = leaders[0] if closed and len(leaders) == 1 else None
        jerseys[category] = CategoryJersey(
            category=category,
            week_count=week_counts[category],
            tallies=ordered,
            leaders=leaders,
            champion=champion,
        )
    return jerseys


def get_season_jerseys(session: Session, season_id: int, now: Optional[int] = None) -> SeasonJerseys:
    scored = score_season(session, season_id)
    status = season_status(scored.season, now)
    return SeasonJerseys(
        season_id=scored.season.id,
        status=status,
        categories=build_jerseys(scored.weeks, closed=status is SeasonStatus.CLOSED),
        skipped_weeks=list(scored.skipped),
    )


def _wins_to_dict(item: CategoryWins) -> Dict[str, Any]:
    return {"participant_id": item.participant_id, "name": item.name, "wins": item.wins}


def jerseys_to_dict(jerseys: SeasonJerseys) -> Dict[str, Any]:
    return {
        "season_id": jerseys.season_id,
        "status": jerseys.status.value,
        "categories": {
            category.value: {
                "weeks": jersey.week_count,
                "tallies": [_wins_to_dict(item) for item in jersey.tallies],
                "leaders": [_wins_to_dict(item) for item in jersey.leaders],
                "champion": _wins_to_dict(jersey.champion) if jersey.champion else None,
            }
            for category, jersey in jerseys.categories.items()
        },
        "skipped_weeks": [
            {"week_id": skipped.week_id, "reason": skipped.reason}
            for skipped in jerseys.skipped_weeks
        ],
    }


__all__ = [
    "CategoryJersey",
    "CategoryWins",
    "SeasonJerseys",
    "WeekCategory",
    "build_jerseys",
    "classify_week",
    "get_season_jerseys",
    "jerseys_to_dict",
    "tally_category_wins",
]
