"""System-level API endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ...core import CLIMB_GRADE_THRESHOLD, DEFAULT_MULTIPLIER

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/healthz")
def healthz() -> JSONResponse:
    """Kubernetes-style readiness endpoint."""

    return JSONResponse({"ok": True})


@router.get("/config")
def get_config() -> Dict[str, Any]:
    """Expose the scoring rules the frontend displays."""

    return {
        "climb_grade_threshold": CLIMB_GRADE_THRESHOLD,
        "default_multiplier": DEFAULT_MULTIPLIER,
    }


__all__ = ["router"]
