"""Weekly leaderboard assembly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from sqlmodel import Session

from ..models import SegmentEffort
from .ghost import GhostData, ghost_map_for
from .jerseys import WeekCategory, classify_week
from .profiles import ProfileLookup
from .queries import load_efforts, load_week, load_week_results
from .records import WeekInfo
from .scoring import ScoredResult, score_results


@dataclass(frozen=True)
class LapBreakdown:
    lap: int
    time_seconds: int
    pr_achieved: bool
    effort_id: Optional[str] = None
    average_watts: Optional[float] = None
    average_heartrate: Optional[float] = None
    average_cadence: Optional[float] = None


@dataclass(frozen=True)
class LeaderboardEntry:
    scored: ScoredResult
    laps: Tuple[LapBreakdown, ...] = ()
    ghost: Optional[GhostData] = None
    profile_picture_url: Optional[str] = None


@dataclass(frozen=True)
class WeekLeaderboard:
    week: WeekInfo
    category: WeekCategory
    entries: Tuple[LeaderboardEntry, ...]


def _lap(effort: SegmentEffort) -> LapBreakdown:
    return LapBreakdown(
        lap=effort.effort_index + 1,
        time_seconds=effort.elapsed_seconds,
        pr_achieved=bool(effort.pr_achieved),
        effort_id=effort.external_id,
        average_watts=effort.average_watts,
        average_heartrate=effort.average_heartrate,
        average_cadence=effort.average_cadence,
    )


def get_week_leaderboard(
    session: Session, week_id: int, profiles: Optional[ProfileLookup] = None
) -> WeekLeaderboard:
    """Rank a week's stored results with laps, ghosts and points attached."""

    week = load_week(session, week_id)
    scored = score_results(load_week_results(session, week.id), week.multiplier)
    efforts = load_efforts(session, (item.result.activity_id for item in scored))
    ghosts = ghost_map_for(session, week)
    pictures = profiles.lookup([item.participant_id for item in scored]) if profiles else {}

    entries = tuple(
        LeaderboardEntry(
            scored=item,
            laps=tuple(_lap(effort) for effort in efforts.get(item.result.activity_id, [])),
            ghost=ghosts.get(item.participant_id),
            profile_picture_url=pictures.get(item.participant_id),
        )
        for item in scored
    )
    return WeekLeaderboard(week=week, category=classify_week(week.average_grade), entries=entries)


def week_to_dict(week: WeekInfo) -> Dict[str, Any]:
    return {
        "id": week.id,
        "season_id": week.season_id,
        "name": week.name,
        "segment_id": week.segment_id,
        "segment_name": week.segment_name,
        "average_grade": week.average_grade,
        "required_laps": week.required_laps,
        "start_at": week.start_at,
        "end_at": week.end_at,
        "multiplier": week.multiplier,
        "notes": week.notes,
    }


def _entry_to_dict(entry: LeaderboardEntry) -> Dict[str, Any]:
    scored = entry.scored
    result = scored.result
    ghost = entry.ghost
    return {
        "rank": scored.rank,
        "participant_id": scored.participant_id,
        "name": scored.participant_name,
        "profile_picture_url": entry.profile_picture_url,
        "time_seconds": scored.total_time_seconds,
        "points": {
            "base": scored.base_points,
            "participation": scored.participation_bonus,
            "pr_bonus": scored.pr_bonus_points,
            "multiplier": scored.multiplier,
            "total": scored.total_points,
        },
        "efforts": [
            {
                "lap": lap.lap,
                "time_seconds": lap.time_seconds,
                "pr_achieved": lap.pr_achieved,
                "effort_id": lap.effort_id,
                "average_watts": lap.average_watts,
                "average_heartrate": lap.average_heartrate,
                "average_cadence": lap.average_cadence,
            }
            for lap in entry.laps
        ],
        "ghost": (
            {
                "previous_time_seconds": ghost.previous_time_seconds,
                "previous_week_name": ghost.previous_week_name,
                "time_diff_seconds": ghost.diff(scored.total_time_seconds),
                "activity_id": ghost.external_activity_id,
            }
            if ghost
            else None
        ),
        "activity": {
            "id": result.external_activity_id,
            "start_at": result.activity_start_at,
            "device_name": result.device_name,
        },
    }


def leaderboard_to_dict(board: WeekLeaderboard) -> Dict[str, Any]:
    """Serialise a leaderboard to an API-friendly dict."""

    entries: List[Dict[str, Any]] = [_entry_to_dict(entry) for entry in board.entries]
    return {
        "week": {**week_to_dict(board.week), "category": board.category.value},
        "entries": entries,
    }


__all__ = [
    "LapBreakdown",
    "LeaderboardEntry",
    "WeekLeaderboard",
    "get_week_leaderboard",
    "leaderboard_to_dict",
    "week_to_dict",
]
