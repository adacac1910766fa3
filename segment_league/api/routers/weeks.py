"""Week leaderboard, submission and refresh endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from ...core import LeagueError, NotFound, TelemetryError, get_session
from ...models import Result
from ...services.credentials import CredentialStore
from ...services.ingest import refresh_week_result
from ...services.leaderboard import get_week_leaderboard, leaderboard_to_dict
from ...services.profiles import ProfileLookup
from ...services.qualifying import QualifyingSelection, Rejection, evaluate_week_candidates
from ...services.records import PerformanceRecord, effort_to_dict, performance_from_payload
from ...services.storage import delete_participant_week, replace_performance
from ...services.telemetry import TelemetryProvider
from ..deps import get_credentials, get_profile_lookup, get_telemetry

router = APIRouter(tags=["weeks"])


def _rejections_to_list(rejections: List[Rejection]) -> List[Dict[str, str]]:
    return [{"activity_id": item.activity_id, "reason": item.reason} for item in rejections]


def _stored_result_to_dict(result: Result, selection: QualifyingSelection) -> Dict[str, Any]:
    return {
        "id": result.id,
        "participant_id": result.participant_id,
        "week_id": result.week_id,
        "activity_id": selection.activity.activity_id,
        "total_time_seconds": result.total_time_seconds,
        "laps": [index + 1 for index in selection.lap_indices],
        "matching_efforts": selection.matching_effort_count,
        "pr_achieved": selection.pr_achieved,
        "efforts": [effort_to_dict(effort) for effort in selection.efforts],
    }


@router.get("/weeks/{week_id}/leaderboard")
def week_leaderboard(
    week_id: int,
    session: Session = Depends(get_session),
    profiles: ProfileLookup = Depends(get_profile_lookup),
):
    """Ranked results of a week, recomputed from stored rows."""

    try:
        board = get_week_leaderboard(session, week_id, profiles=profiles)
    except NotFound as exc:
        raise HTTPException(404, str(exc)) from exc
    return leaderboard_to_dict(board)


@router.post("/weeks/{week_id}/submissions")
def submit_activities(
    week_id: int, body: Dict[str, Any], session: Session = Depends(get_session)
):
    """Select the participant's qualifying activity and store it."""

    participant_id = str(body.get("participant_id") or "").strip()
    activities = body.get("activities")
    if not participant_id:
        raise HTTPException(400, "participant_id required")
    if not isinstance(activities, list):
        raise HTTPException(400, "activities must be a list")

    candidates: List[PerformanceRecord] = []
    unreadable: List[Rejection] = []
    for index, payload in enumerate(activities):
        try:
            candidates.append(performance_from_payload(payload))
        except LeagueError as exc:
            activity_id = payload.get("id") if isinstance(payload, dict) else None
            unreadable.append(Rejection(str(activity_id if activity_id is not None else f"#{index}"), str(exc)))

    try:
        report = evaluate_week_candidates(session, participant_id, week_id, candidates)
    except NotFound as exc:
        raise HTTPException(404, str(exc)) from exc

    rejected = _rejections_to_list([*unreadable, *report.rejected])
    selection = report.selection
    if selection is None:
        return {"qualified": False, "rejected": rejected}

    try:
        result = replace_performance(session, participant_id, week_id, selection)
    except NotFound as exc:
        raise HTTPException(404, str(exc)) from exc

    return {
        "qualified": True,
        "result": _stored_result_to_dict(result, selection),
        "rejected": rejected,
    }


@router.post("/weeks/{week_id}/participants/{participant_id}/refresh")
def refresh_week_submission(
    week_id: int,
    participant_id: str,
    session: Session = Depends(get_session),
    credentials: CredentialStore = Depends(get_credentials),
    telemetry: TelemetryProvider = Depends(get_telemetry),
):
    """Fetch the participant's activities for the week and store the best one."""

    try:
        outcome = refresh_week_result(session, participant_id, week_id, credentials, telemetry)
    except NotFound as exc:
        raise HTTPException(404, str(exc)) from exc
    except TelemetryError as exc:
        raise HTTPException(502, str(exc)) from exc

    report = outcome.report
    return {
        "status": outcome.status.value,
        "reason": outcome.reason,
        "result": (
            _stored_result_to_dict(outcome.result, report.selection)
            if outcome.result is not None and report is not None and report.selection is not None
            else None
        ),
        "rejected": _rejections_to_list(report.rejected) if report else [],
    }


@router.delete("/weeks/{week_id}/participants/{participant_id}")
def delete_week_submission(
    week_id: int, participant_id: str, session: Session = Depends(get_session)
):
    """Remove a participant's stored activity and result for the week."""

    delete_participant_week(session, participant_id, week_id)
    return {"ok": True}


__all__ = ["router"]
