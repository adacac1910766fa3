"""Service layer helpers."""

from .ghost import GhostData, get_ghost, get_ghost_map
from .jerseys import WeekCategory, classify_week, get_season_jerseys, jerseys_to_dict
from .laps import LapWindow, select_best_window
from .leaderboard import get_week_leaderboard, leaderboard_to_dict
from .qualifying import (
    QualifyingSelection,
    SelectionReport,
    evaluate_candidates,
    select_qualifying_performance,
)
from .records import EffortRecord, PerformanceRecord, TimeWindow, performance_from_payload
from .scoring import calculate_week_scoring, score_results
from .standings import get_season_standings, standings_to_dict
from .storage import delete_participant_data, delete_participant_week, replace_performance
from .windows import SeasonStatus, is_within, season_status

__all__ = [
    "EffortRecord",
    "GhostData",
    "LapWindow",
    "PerformanceRecord",
    "QualifyingSelection",
    "SeasonStatus",
    "SelectionReport",
    "TimeWindow",
    "WeekCategory",
    "calculate_week_scoring",
    "classify_week",
    "delete_participant_data",
    "delete_participant_week",
    "evaluate_candidates",
    "get_ghost",
    "get_ghost_map",
    "get_season_jerseys",
    "get_season_standings",
    "get_week_leaderboard",
    "is_within",
    "jerseys_to_dict",
    "leaderboard_to_dict",
    "performance_from_payload",
    "replace_performance",
    "score_results",
    "season_status",
    "select_best_window",
    "select_qualifying_performance",
    "standings_to_dict",
]
