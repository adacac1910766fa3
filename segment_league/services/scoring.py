"""Weekly ranking and points.

Points for a finisher ranked ``rank`` out of ``total``::

    (total - rank + participation bonus + PR bonus) * week multiplier

Ranks are positions after sorting by total time; equal times are ordered by
participant id so the outcome never depends on row order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from sqlmodel import Session

from ..core.config import PARTICIPATION_BONUS, PR_BONUS
from ..core.errors import InvalidInput
from .queries import load_week, load_week_results
from .records import WeekInfo, WeekResult


@dataclass(frozen=True)
class ScoredResult:
    rank: int
    result: WeekResult
    base_points: int
    participation_bonus: int
    pr_bonus_points: int
    multiplier: int
    total_points: int

    @property
    def participant_id(self) -> str:
        return self.result.participant_id

    @property
    def participant_name(self) -> str:
        return self.result.participant_name

    @property
    def total_time_seconds(self) -> int:
        return self.result.total_time_seconds


@dataclass(frozen=True)
class WeekScoring:
    week: WeekInfo
    results: Tuple[ScoredResult, ...]

    @property
    def winner(self) -> Optional[ScoredResult]:
        return self.results[0] if self.results else None


def rank_order(results: Sequence[WeekResult]) -> List[WeekResult]:
    return sorted(results, key=lambda item: (item.total_time_seconds, item.participant_id))


def score_results(results: Sequence[WeekResult], multiplier: int = 1) -> List[ScoredResult]:
    """Rank ``results`` and compute each finisher's points."""

    if isinstance(multiplier, bool) or not isinstance(multiplier, int) or multiplier < 1:
        raise InvalidInput(f"multiplier must be a positive integer, got {multiplier!r}")

    ordered = rank_order(results)
    total = len(ordered)
    scored: List[ScoredResult] = []
    for rank, result in enumerate(ordered, start=1):
        base_points = total - rank
        pr_bonus = PR_BONUS if result.pr_achieved else 0
        scored.append(
            ScoredResult(
                rank=rank,
                result=result,
                base_points=base_points,
                participation_bonus=PARTICIPATION_BONUS,
                pr_bonus_points=pr_bonus,
                multiplier=multiplier,
                total_points=(base_points + PARTICIPATION_BONUS + pr_bonus) * multiplier,
            )
        )
    return scored


def calculate_week_scoring(session: Session, week_id: int) -> WeekScoring:
    """Score a week from the rows stored right now."""

    week = load_week(session, week_id)
    results = load_week_results(session, week.id)
    return WeekScoring(week=week, results=tuple(score_results(results, week.multiplier)))


__all__ = [
    "ScoredResult",
    "WeekScoring",
    "calculate_week_scoring",
    "rank_order",
    "score_results",
]
