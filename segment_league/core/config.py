"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


# Storage --------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = Path(os.getenv("DATA_DIR", str(_PROJECT_ROOT / "data")))
DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite:///{DATA_DIR / 'league.db'}"
DB_RESET = _env_bool("DB_RESET", False)


# Logging --------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()


# HTTP -----------------------------------------------------------------------
_local_dev_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

ALLOWED_CORS_ORIGINS = _unique(
    [
        *_split_csv(os.getenv("FRONTEND_ORIGIN")),
        *_split_csv(os.getenv("ADDITIONAL_ALLOWED_ORIGINS")),
        *_local_dev_origins,
    ]
)


# Strava ---------------------------------------------------------------------
# Client credentials are only needed when expired tokens must be refreshed.
STRAVA_CLIENT_ID = os.getenv("STRAVA_CLIENT_ID", "")
STRAVA_CLIENT_SECRET = os.getenv("STRAVA_CLIENT_SECRET", "")
STRAVA_API_BASE = os.getenv("STRAVA_API_BASE", "https://www.strava.com/api/v3")
STRAVA_TOKEN_URL = os.getenv("STRAVA_TOKEN_URL", "https://www.strava.com/oauth/token")
STRAVA_TIMEOUT_SECONDS = _env_int("STRAVA_TIMEOUT_SECONDS", 30)
TOKEN_EXPIRY_LEEWAY_SECONDS = 60


# Profile cache --------------------------------------------------------------
PROFILE_CACHE_TTL_SECONDS = _env_int("PROFILE_CACHE_TTL_SECONDS", 3600)
PROFILE_CACHE_MAX_ENTRIES = _env_int("PROFILE_CACHE_MAX_ENTRIES", 500)


# Competition rules ----------------------------------------------------------
# Weeks whose segment average grade exceeds this percentage are climbs.
CLIMB_GRADE_THRESHOLD = 2.0
DEFAULT_MULTIPLIER = 1
PARTICIPATION_BONUS = 1
PR_BONUS = 1


__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CLIMB_GRADE_THRESHOLD",
    "DATABASE_URL",
    "DATA_DIR",
    "DB_RESET",
    "DEFAULT_MULTIPLIER",
    "LOG_LEVEL",
    "PARTICIPATION_BONUS",
    "PROFILE_CACHE_MAX_ENTRIES",
    "PROFILE_CACHE_TTL_SECONDS",
    "PR_BONUS",
    "STRAVA_API_BASE",
    "STRAVA_CLIENT_ID",
    "STRAVA_CLIENT_SECRET",
    "STRAVA_TIMEOUT_SECONDS",
    "STRAVA_TOKEN_URL",
    "TOKEN_EXPIRY_LEEWAY_SECONDS",
]
