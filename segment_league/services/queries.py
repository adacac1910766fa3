"""Read queries over stored rows.

Nothing here caches: every call reads the current rows so that scores are
always derived from what is stored right now.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlmodel import Session, select

from ..core.errors import NotFound
from ..models import Activity, Participant, Result, Season, Segment, SegmentEffort, Week
from .records import WeekInfo, WeekResult


def _week_info(week: Week, segment: Optional[Segment]) -> WeekInfo:
    return WeekInfo(
        id=week.id,
        season_id=week.season_id,
        name=week.name,
        segment_id=week.segment_id,
        required_laps=week.required_laps,
        start_at=week.start_at,
        end_at=week.end_at,
        multiplier=week.multiplier,
        segment_name=segment.name if segment else None,
        average_grade=segment.average_grade if segment else None,
        notes=week.notes or "",
    )


def load_week(session: Session, week_id: int) -> WeekInfo:
    row = session.exec(
        select(Week, Segment)
        .join(Segment, Segment.id == Week.segment_id, isouter=True)
        .where(Week.id == week_id)
    ).first()
    if row is None:
        raise NotFound(f"Week {week_id} not found")
    week, segment = row
    return _week_info(week, segment)


def load_season(session: Session, season_id: int) -> Season:
    season = session.get(Season, season_id)
    if season is None:
        raise NotFound(f"Season {season_id} not found")
    return season


def load_season_week_ids(session: Session, season_id: int) -> List[int]:
    """Week ids of a season in chronological order."""

    return list(
        session.exec(
            select(Week.id)
            .where(Week.season_id == season_id)
            .order_by(Week.start_at.asc(), Week.id.asc())
        ).all()
    )


def _activities_with_pr(session: Session, activity_ids: Iterable[int]) -> set[int]:
    ids = [activity_id for activity_id in activity_ids if activity_id is not None]
    if not ids:
        return set()
    return set(
        session.exec(
            select(SegmentEffort.activity_id)
            .where(SegmentEffort.activity_id.in_(ids))
            .where(SegmentEffort.pr_achieved == True)  # noqa: E712
        ).all()
    )


def load_week_results(session: Session, week_id: int) -> List[WeekResult]:
    """Stored results of a week, unordered, with the PR flag resolved."""

    rows = session.exec(
        select(Result, Participant, Activity)
        .join(Participant, Participant.id == Result.participant_id, isouter=True)
        .join(Activity, Activity.id == Result.activity_id, isouter=True)
        .where(Result.week_id == week_id)
    ).all()

    with_pr = _activities_with_pr(session, (result.activity_id for result, _, _ in rows))
    return [
        WeekResult(
            participant_id=result.participant_id,
            participant_name=participant.name if participant else "Unknown",
            total_time_seconds=result.total_time_seconds,
            pr_achieved=result.activity_id in with_pr,
            activity_id=result.activity_id,
            external_activity_id=activity.external_id if activity else None,
            activity_start_at=activity.start_at if activity else None,
            device_name=activity.device_name if activity else None,
        )
        for result, participant, activity in rows
    ]


def load_efforts(session: Session, activity_ids: Iterable[int]) -> Dict[int, List[SegmentEffort]]:
    """Stored efforts per activity, in lap order."""

    ids = [activity_id for activity_id in activity_ids if activity_id is not None]
    grouped: Dict[int, List[SegmentEffort]] = defaultdict(list)
    if not ids:
        return grouped
    efforts = session.exec(
        select(SegmentEffort)
        .where(SegmentEffort.activity_id.in_(ids))
        .order_by(SegmentEffort.activity_id.asc(), SegmentEffort.effort_index.asc())
    ).all()
    for effort in efforts:
        grouped[effort.activity_id].append(effort)
    return grouped


def load_previous_comparable_week(session: Session, week: WeekInfo) -> Optional[Week]:
    """Most recent earlier week on the same segment with the same lap count."""

    return session.exec(
        select(Week)
        .where(Week.id != week.id)
        .where(Week.segment_id == week.segment_id)
        .where(Week.required_laps == week.required_laps)
        .where(Week.start_at < week.start_at)
        .order_by(Week.start_at.desc(), Week.id.desc())
        .limit(1)
    ).first()


__all__ = [
    "load_efforts",
    "load_previous_comparable_week",
    "load_season",
    "load_season_week_ids",
    "load_week",
    "load_week_results",
]
