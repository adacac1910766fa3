"""Season standings built from weekly scoring."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List

from sqlmodel import Session

from .jerseys import WeekCategory, classify_week
from .scoring import WeekScoring
from .season import SkippedWeek, score_season


@dataclass(frozen=True)
class StandingsEntry:
    participant_id: str
    name: str
    total_points: int
    weeks_completed: int
    climb_wins: int = 0
    flat_wins: int = 0
    rank: int = 0


@dataclass
class SeasonStandings:
    season_id: int
    entries: List[StandingsEntry] = field(default_factory=list)
    skipped_weeks: List[SkippedWeek] = field(default_factory=list)


def aggregate_standings(weeks: Iterable[WeekScoring]) -> List[StandingsEntry]:
    """Sum weekly points per participant and rank them.

    Order: points descending, then weeks completed descending, then
    participant id.
    """

    totals: Dict[str, StandingsEntry] = {}
    for week in weeks:
        category = classify_week(week.week.average_grade)
        for scored in week.results:
            won = scored.rank == 1
            entry = totals.get(scored.participant_id) or StandingsEntry(
                participant_id=scored.participant_id,
                name=scored.participant_name,
                total_points=0,
                weeks_completed=0,
            )
            totals[scored.participant_id] = replace(
                entry,
                total_points=entry.total_points + scored.total_points,
                weeks_completed=entry.weeks_completed + 1,
                climb_wins=entry.climb_wins + int(won and category is WeekCategory.CLIMB),
                flat_wins=entry.flat_wins + int(won and category is WeekCategory.FLAT),
            )

    ordered = sorted(
        totals.values(),
        key=lambda item: (-item.total_points, -item.weeks_completed, item.participant_id),
    )
    return [replace(entry, rank=rank) for rank, entry in enumerate(ordered, start=1)]


def get_season_standings(session: Session, season_id: int) -> SeasonStandings:
    scored = score_season(session, season_id)
    return SeasonStandings(
        season_id=scored.season.id,
        entries=aggregate_standings(scored.weeks),
        skipped_weeks=list(scored.skipped),
    )


def standings_to_dict(standings: SeasonStandings) -> Dict[str, Any]:
    return {
        "season_id": standings.season_id,
        "standings": [
            {
                "rank": entry.rank,
                "participant_id": entry.participant_id,
                "name": entry.name,
                "total_points": entry.total_points,
                "weeks_completed": entry.weeks_completed,
                "climb_wins": entry.climb_wins,
                "flat_wins": entry.flat_wins,
            }
            for entry in standings.entries
        ],
        "skipped_weeks": [
            {"week_id": skipped.week_id, "reason": skipped.reason}
            for skipped in standings.skipped_weeks
        ],
    }


__all__ = [
    "SeasonStandings",
    "StandingsEntry",
    "aggregate_standings",
    "get_season_standings",
    "standings_to_dict",
]
