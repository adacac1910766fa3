"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    CLIMB_GRADE_THRESHOLD,
    DATABASE_URL,
    DB_RESET,
    DEFAULT_MULTIPLIER,
    PROFILE_CACHE_MAX_ENTRIES,
    PROFILE_CACHE_TTL_SECONDS,
)
from .database import create_tables, engine, get_session, make_engine
from .errors import (
    CredentialError,
    InsufficientData,
    InvalidInput,
    InvalidTimestamp,
    LeagueError,
    NotConnected,
    NotFound,
    RecordError,
    RefreshFailed,
    TelemetryError,
)
from .logging import get_logger
from .time import now_unix, to_unix, unix_to_iso, utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "CLIMB_GRADE_THRESHOLD",
    "CredentialError",
    "DATABASE_URL",
    "DB_RESET",
    "DEFAULT_MULTIPLIER",
    "InsufficientData",
    "InvalidInput",
    "InvalidTimestamp",
    "LeagueError",
    "NotConnected",
    "NotFound",
    "PROFILE_CACHE_MAX_ENTRIES",
    "PROFILE_CACHE_TTL_SECONDS",
    "RecordError",
    "RefreshFailed",
    "TelemetryError",
    "create_tables",
    "engine",
    "get_logger",
    "get_session",
    "make_engine",
    "now_unix",
    "to_unix",
    "unix_to_iso",
    "utcnow",
]
