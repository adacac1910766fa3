"""Fetch a participant's week from telemetry and store the qualifying result."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sqlmodel import Session

from ..core.errors import CredentialError
from ..core.logging import get_logger
from ..models import Result
from .credentials import CredentialStore
from .qualifying import SelectionReport, evaluate_week_candidates
from .queries import load_week
from .records import PerformanceRecord
from .storage import replace_performance
from .telemetry import TelemetryProvider

logger = get_logger(__name__)


class IngestStatus(str, Enum):
    STORED = "stored"
    NONE_QUALIFIED = "none_qualified"
    NOT_CONNECTED = "not_connected"


@dataclass
class IngestOutcome:
    status: IngestStatus
    report: Optional[SelectionReport] = None
    result: Optional[Result] = None
    reason: Optional[str] = None


def refresh_week_result(
    session: Session,
    participant_id: str,
    week_id: int,
    credentials: CredentialStore,
    telemetry: TelemetryProvider,
) -> IngestOutcome:
    """Re-read a participant's activities for a week and replace their result.

    When nothing qualifies the previously stored result is left as it is.
    """

    week = load_week(session, week_id)
    try:
        token = credentials.get_access_token(participant_id)
    except CredentialError as exc:
        logger.warning("Skipping %s for week %s: %s", participant_id, week.id, exc)
        return IngestOutcome(IngestStatus.NOT_CONNECTED, reason=str(exc))

    summaries = telemetry.list_activities(token, after=week.start_at, before=week.end_at)

    def hydrate(candidate: PerformanceRecord) -> PerformanceRecord:
        return telemetry.get_activity(token, candidate.activity_id)

    report = evaluate_week_candidates(session, participant_id, week.id, summaries, hydrate=hydrate)
    if report.selection is None:
        return IngestOutcome(IngestStatus.NONE_QUALIFIED, report=report)

    result = replace_performance(session, participant_id, week.id, report.selection)
    return IngestOutcome(IngestStatus.STORED, report=report, result=result)


__all__ = ["IngestOutcome", "IngestStatus", "refresh_week_result"]
