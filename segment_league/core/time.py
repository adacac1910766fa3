"""Time helpers. All stored instants are integer Unix seconds (UTC)."""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Union

from .errors import InvalidTimestamp

Timestamp = Union[int, float, datetime, str]


def utcnow() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


def now_unix() -> int:
    return int(utcnow().timestamp())


_UNIX_DIGITS = re.compile(r"-?[0-9]+")


def to_unix(value: Timestamp) -> int:
    """Resolve ``value`` to Unix seconds.

    Accepts Unix seconds, timezone-aware datetimes and ISO 8601 strings with
    an explicit offset (``Z`` included). Naive values carry no absolute
    instant and are rejected, as are non-finite numbers.
    """

    if isinstance(value, bool):
        raise InvalidTimestamp(value)
    try:
        if isinstance(value, (int, float)):
            if not math.isfinite(value):
                raise InvalidTimestamp(value)
            return int(value)
        if isinstance(value, datetime):
            if value.tzinfo is None:
                raise InvalidTimestamp(value)
            return int(value.timestamp())
        if isinstance(value, str):
            raw = value.strip()
            if _UNIX_DIGITS.fullmatch(raw):
                return int(raw)
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
            return to_unix(parsed)
    except (ValueError, OverflowError, OSError) as exc:
        raise InvalidTimestamp(value) from exc
    raise InvalidTimestamp(value)


def unix_to_iso(seconds: int) -> str:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).isoformat().replace("+00:00", "Z")


__all__ = ["Timestamp", "now_unix", "to_unix", "unix_to_iso", "utcnow"]
