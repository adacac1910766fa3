"""Time window checks for weeks and seasons."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..core.time import Timestamp, now_unix, to_unix
from ..models import Season
from .records import TimeWindow


def is_within(timestamp: Timestamp, window: TimeWindow) -> bool:
    """Return whether ``timestamp`` falls inside ``[start_at, end_at)``.

    ``window`` endpoints must already be Unix seconds; no timezone handling
    happens here. Raises :class:`InvalidTimestamp` when ``timestamp`` cannot
    be resolved to an instant.
    """

    instant = to_unix(timestamp)
    return window.start_at <= instant < window.end_at


class SeasonStatus(str, Enum):
    UPCOMING = "upcoming"
    OPEN = "open"
    CLOSED = "closed"


def season_window(season: Season) -> TimeWindow:
    return TimeWindow(season.start_at, season.end_at)


def season_status(season: Season, now: Optional[int] = None) -> SeasonStatus:
    """Classify ``season`` relative to ``now`` (defaults to the current time)."""

    current = now_unix() if now is None else now
    window = season_window(season)
    if current < window.start_at:
        return SeasonStatus.UPCOMING
    if is_within(current, window):
        return SeasonStatus.OPEN
    return SeasonStatus.CLOSED


__all__ = ["SeasonStatus", "is_within", "season_status", "season_window"]
