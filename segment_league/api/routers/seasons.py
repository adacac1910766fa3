"""Season standings and jersey endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from ...core import NotFound, get_session
from ...services.jerseys import get_season_jerseys, jerseys_to_dict
from ...services.standings import get_season_standings, standings_to_dict

router = APIRouter(prefix="/seasons", tags=["seasons"])


@router.get("/{season_id}/standings")
def season_standings(season_id: int, session: Session = Depends(get_session)):
    """Season points table summed over every week."""

    try:
        standings = get_season_standings(session, season_id)
    except NotFound as exc:
        raise HTTPException(404, str(exc)) from exc
    return standings_to_dict(standings)


@router.get("/{season_id}/jerseys")
def season_jerseys(season_id: int, session: Session = Depends(get_session)):
    """Climb and flat jersey tallies, with champions once the season is closed."""

    try:
        jerseys = get_season_jerseys(session, season_id)
    except NotFound as exc:
        raise HTTPException(404, str(exc)) from exc
    return jerseys_to_dict(jerseys)


__all__ = ["router"]
