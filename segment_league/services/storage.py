"""Transactional writes for submitted performances.

A resubmission replaces everything a participant had stored for the week in
one transaction, so a reader never sees zero or two results mid-update.
"""

from __future__ import annotations

from typing import Iterable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.errors import NotFound
from ..core.logging import get_logger
from ..core.time import utcnow
from ..models import Activity, Participant, ParticipantToken, Result, SegmentEffort, Week
from .qualifying import QualifyingSelection

logger = get_logger(__name__)


def _delete_all(session: Session, rows: Iterable[object]) -> int:
    count = 0
    for row in rows:
        session.delete(row)
        count += 1
    session.flush()
    return count


def _delete_activities(session: Session, activities: List[Activity]) -> None:
    activity_ids = [activity.id for activity in activities]
    if activity_ids:
        _delete_all(
            session,
            session.exec(select(SegmentEffort).where(SegmentEffort.activity_id.in_(activity_ids))).all(),
        )
    _delete_all(session, activities)


def _delete_week_rows(session: Session, participant_id: str, week_id: int) -> None:
    activities = session.exec(
        select(Activity)
        .where(Activity.week_id == week_id)
        .where(Activity.participant_id == participant_id)
    ).all()
    _delete_all(
        session,
        session.exec(
            select(Result)
            .where(Result.week_id == week_id)
            .where(Result.participant_id == participant_id)
        ).all(),
    )
    _delete_activities(session, list(activities))


def replace_performance(
    session: Session, participant_id: str, week_id: int, selection: QualifyingSelection
) -> Result:
    """Store ``selection`` as the participant's only result for the week."""

    if session.get(Week, week_id) is None:
        raise NotFound(f"Week {week_id} not found")
    if session.get(Participant, participant_id) is None:
        raise NotFound(f"Participant {participant_id} not found")

    try:
        _delete_week_rows(session, participant_id, week_id)

        activity = Activity(
            week_id=week_id,
            participant_id=participant_id,
            external_id=selection.activity.activity_id,
            name=selection.activity.name,
            start_at=selection.activity_start_at,
            device_name=selection.activity.device_name,
        )
        session.add(activity)
        session.flush()

        for lap_index, effort in zip(selection.lap_indices, selection.efforts):
            session.add(
                SegmentEffort(
                    activity_id=activity.id,
                    segment_id=effort.segment_id,
                    external_id=effort.effort_id,
                    effort_index=lap_index,
                    elapsed_seconds=effort.elapsed_seconds,
                    start_at=effort.start_at,
                    pr_achieved=effort.pr_achieved,
                    average_watts=effort.average_watts,
                    average_heartrate=effort.average_heartrate,
                    average_cadence=effort.average_cadence,
                )
            )

        now = utcnow()
        result = Result(
            week_id=week_id,
            participant_id=participant_id,
            activity_id=activity.id,
            total_time_seconds=selection.total_time_seconds,
            created_at=now,
            updated_at=now,
        )
        session.add(result)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Storing week %s result for %s failed", week_id, participant_id)
        raise

    session.refresh(result)
    logger.info(
        "Stored week %s result for %s: activity %s, %ds",
        week_id,
        participant_id,
        selection.activity.activity_id,
        selection.total_time_seconds,
    )
    return result


def delete_participant_week(session: Session, participant_id: str, week_id: int) -> None:
    """Remove a participant's activity, efforts and result for one week."""

    try:
        _delete_week_rows(session, participant_id, week_id)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise


def delete_participant_data(session: Session, participant_id: str) -> None:
    """Remove every row belonging to a participant, the participant included."""

    participant = session.get(Participant, participant_id)
    if participant is None:
        raise NotFound(f"Participant {participant_id} not found")

    try:
        _delete_all(
            session,
            session.exec(select(Result).where(Result.participant_id == participant_id)).all(),
        )
        _delete_activities(
            session,
            list(session.exec(select(Activity).where(Activity.participant_id == participant_id)).all()),
        )
        token = session.get(ParticipantToken, participant_id)
        if token is not None:
            _delete_all(session, [token])
        session.delete(participant)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    logger.info("Deleted all data for participant %s", participant_id)


__all__ = ["delete_participant_data", "delete_participant_week", "replace_performance"]
