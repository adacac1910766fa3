"""Choose which of a participant's activities counts for a week.

Candidates outside the week window are dropped, the remaining ones are
reduced to their efforts on the week's segment, and the fastest contiguous
run of ``required_laps`` efforts is taken from each. The candidate with the
smallest such total wins. A candidate that cannot be evaluated (bad
timestamp, failed telemetry fetch, too few laps) is rejected on its own and
never stops the others from being considered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from sqlmodel import Session

from ..core.errors import InsufficientData, InvalidInput, InvalidTimestamp, LeagueError
from ..core.logging import get_logger
from ..core.time import to_unix
from .laps import select_best_window
from .queries import load_week
from .records import EffortRecord, PerformanceRecord, TimeWindow
from .windows import is_within

logger = get_logger(__name__)

Hydrator = Callable[[PerformanceRecord], PerformanceRecord]


@dataclass(frozen=True)
class QualifyingSelection:
    """The activity and laps accepted as a participant's result."""

    activity: PerformanceRecord
    activity_start_at: int
    efforts: Tuple[EffortRecord, ...]
    lap_indices: Tuple[int, ...]
    total_time_seconds: int
    matching_effort_count: int

    @property
    def pr_achieved(self) -> bool:
        return any(effort.pr_achieved for effort in self.efforts)


@dataclass(frozen=True)
class Rejection:
    activity_id: str
    reason: str


@dataclass
class SelectionReport:
    selection: Optional[QualifyingSelection] = None
    rejected: List[Rejection] = field(default_factory=list)

    @property
    def qualified(self) -> bool:
        return self.selection is not None


def _reject(report: SelectionReport, activity_id: str, reason: str) -> None:
    logger.info("Candidate %s rejected: %s", activity_id, reason)
    report.rejected.append(Rejection(activity_id, reason))


def _in_window(
    candidates: Iterable[PerformanceRecord], window: TimeWindow, report: SelectionReport
) -> List[Tuple[int, PerformanceRecord]]:
    accepted: List[Tuple[int, PerformanceRecord]] = []
    for candidate in candidates:
        try:
            started = to_unix(candidate.start_date)
        except InvalidTimestamp as exc:
            _reject(report, candidate.activity_id, str(exc))
            continue
        if not is_within(started, window):
            _reject(report, candidate.activity_id, "outside time window")
            continue
        accepted.append((started, candidate))
    # Earliest candidate keeps the lead on equal totals.
    accepted.sort(key=lambda item: (item[0], item[1].activity_id))
    return accepted


def evaluate_candidates(
    candidates: Sequence[PerformanceRecord],
    segment_id: str,
    required_laps: int,
    window: TimeWindow,
    hydrate: Optional[Hydrator] = None,
) -> SelectionReport:
    """Evaluate every candidate and return the winner plus all rejections.

    ``hydrate`` is called for candidates whose efforts are not loaded yet;
    any :class:`LeagueError` it raises only disqualifies that candidate.
    """

    if isinstance(required_laps, bool) or not isinstance(required_laps, int) or required_laps < 1:
        raise InvalidInput(f"required_laps must be a positive integer, got {required_laps!r}")

    report = SelectionReport()
    for started, candidate in _in_window(candidates, window, report):
        if candidate.efforts is None and hydrate is not None:
            try:
                candidate = hydrate(candidate)
            except LeagueError as exc:
                logger.warning("Could not load activity %s: %s", candidate.activity_id, exc)
                report.rejected.append(Rejection(candidate.activity_id, f"fetch failed: {exc}"))
                continue

        matching = candidate.efforts_on(segment_id)
        if not matching:
            _reject(report, candidate.activity_id, f"segment {segment_id} not found")
            continue

        try:
            lap_window = select_best_window([e.elapsed_seconds for e in matching], required_laps)
        except InsufficientData as exc:
            _reject(report, candidate.activity_id, str(exc))
            continue

        best = report.selection
        if best is None or lap_window.total_seconds < best.total_time_seconds:
            report.selection = QualifyingSelection(
                activity=candidate,
                activity_start_at=started,
                efforts=tuple(matching[index] for index in lap_window.indices),
                lap_indices=lap_window.indices,
                total_time_seconds=lap_window.total_seconds,
                matching_effort_count=len(matching),
            )

    if report.selection is None:
        logger.info("No qualifying activity among %d candidates", len(candidates))
    else:
        chosen = report.selection
        logger.info(
            "Selected activity %s: %ds over laps %s of %d",
            chosen.activity.activity_id,
            chosen.total_time_seconds,
            [index + 1 for index in chosen.lap_indices],
            chosen.matching_effort_count,
        )
    return report


def evaluate_week_candidates(
    session: Session,
    participant_id: str,
    week_id: int,
    candidates: Sequence[PerformanceRecord],
    hydrate: Optional[Hydrator] = None,
) -> SelectionReport:
    week = load_week(session, week_id)
    logger.info(
        "Evaluating %d candidates for participant %s in week %s",
        len(candidates),
        participant_id,
        week.id,
    )
    return evaluate_candidates(
        candidates, week.segment_id, week.required_laps, week.window, hydrate=hydrate
    )


def select_qualifying_performance(
    session: Session,
    participant_id: str,
    week_id: int,
    candidates: Sequence[PerformanceRecord],
    hydrate: Optional[Hydrator] = None,
) -> Optional[QualifyingSelection]:
    """Return the participant's qualifying selection for the week, or ``None``."""

    report = evaluate_week_candidates(session, participant_id, week_id, candidates, hydrate)
    return report.selection


__all__ = [
    "Hydrator",
    "QualifyingSelection",
    "Rejection",
    "SelectionReport",
    "evaluate_candidates",
    "evaluate_week_candidates",
    "select_qualifying_performance",
]
