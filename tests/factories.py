"""Builders for rows and candidate activities used across the tests."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from sqlmodel import Session

from segment_league.models import Participant, Result, Season, Segment, Week
from segment_league.services.qualifying import evaluate_candidates
from segment_league.services.records import EffortRecord, PerformanceRecord, TimeWindow
from segment_league.services.storage import replace_performance

DAY = 86_400
BASE = 1_735_689_600  # 2025-01-01T00:00:00Z


def add_segment(
    session: Session, segment_id: str = "seg-flat", grade: Optional[float] = 1.0, name: str = "River Road"
) -> Segment:
    segment = Segment(id=segment_id, name=name, average_grade=grade, distance_m=2400.0)
    session.add(segment)
    session.commit()
    session.refresh(segment)
    return segment


def add_season(
    session: Session, name: str = "Winter 2025", start_at: int = BASE, end_at: int = BASE + 70 * DAY
) -> Season:
    season = Season(name=name, start_at=start_at, end_at=end_at)
    session.add(season)
    session.commit()
    session.refresh(season)
    return season


def add_week(
    session: Session,
    season: Season,
    segment: Segment,
    name: str = "Week 1",
    start_at: int = BASE,
    laps: int = 1,
    multiplier: int = 1,
) -> Week:
    week = Week(
        season_id=season.id,
        name=name,
        segment_id=segment.id,
        required_laps=laps,
        start_at=start_at,
        end_at=start_at + 7 * DAY,
        multiplier=multiplier,
    )
    session.add(week)
    session.commit()
    session.refresh(week)
    return week


def add_participants(session: Session, *participant_ids: str) -> None:
    for participant_id in participant_ids:
        session.add(Participant(id=participant_id, name=participant_id.title()))
    session.commit()


def effort(
    seconds: int,
    start_at: int = BASE + 3_600,
    segment_id: str = "seg-flat",
    pr: bool = False,
    effort_id: Optional[str] = None,
) -> EffortRecord:
    return EffortRecord(
        segment_id=segment_id,
        elapsed_seconds=seconds,
        start_at=start_at,
        pr_achieved=pr,
        effort_id=effort_id,
    )


def activity(
    activity_id: str,
    start_at: int,
    laps: Sequence[int],
    segment_id: str = "seg-flat",
    pr_laps: Iterable[int] = (),
) -> PerformanceRecord:
    """Candidate with one effort per entry of ``laps`` on ``segment_id``."""

    prs = set(pr_laps)
    return PerformanceRecord(
        activity_id=activity_id,
        start_date=start_at,
        efforts=tuple(
            effort(
                seconds,
                start_at=start_at + index * 900,
                segment_id=segment_id,
                pr=index in prs,
                effort_id=f"{activity_id}-{index}",
            )
            for index, seconds in enumerate(laps)
        ),
        name=f"Ride {activity_id}",
    )


def record_result(
    session: Session,
    participant_id: str,
    week: Week,
    laps: Sequence[int],
    pr_laps: Iterable[int] = (),
    activity_id: Optional[str] = None,
) -> Result:
    """Select and store a result the way a submission would."""

    candidate = activity(
        activity_id or f"{participant_id}-{week.id}",
        week.start_at + DAY,
        laps,
        segment_id=week.segment_id,
        pr_laps=pr_laps,
    )
    report = evaluate_candidates(
        [candidate], week.segment_id, week.required_laps, TimeWindow(week.start_at, week.end_at)
    )
    assert report.selection is not None
    return replace_performance(session, participant_id, week.id, report.selection)
