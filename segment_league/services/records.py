"""Typed records passed between the scoring components.

Rows coming out of the database and payloads coming in from telemetry are
converted into these frozen records. Construction validates the shape and
raises :class:`RecordError` instead of letting ``None`` or negative values
reach the scoring code.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from ..core.errors import InvalidInput, RecordError
from ..core.time import Timestamp, to_unix


def _require_int(name: str, value: Any, *, minimum: Optional[int] = None) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordError(f"{name} must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise RecordError(f"{name} must be >= {minimum}, got {value}")


def _require_text(name: str, value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise RecordError(f"{name} must be a non-empty string, got {value!r}")


def _optional_metric(name: str, value: Any) -> None:
    if value is None:
        return
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
        or value < 0
    ):
        raise RecordError(f"{name} must be a non-negative number, got {value!r}")


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval ``[start_at, end_at)`` in Unix seconds."""

    start_at: int
    end_at: int

    def __post_init__(self) -> None:
        for name in ("start_at", "end_at"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInput(f"{name} must be Unix seconds, got {value!r}")
        if self.end_at < self.start_at:
            raise InvalidInput(f"window ends before it starts: [{self.start_at}, {self.end_at})")


@dataclass(frozen=True)
class EffortRecord:
    """One timed pass over a segment inside a performance record."""

    segment_id: str
    elapsed_seconds: int
    start_at: int
    pr_achieved: bool = False
    effort_id: Optional[str] = None
    average_watts: Optional[float] = None
    average_heartrate: Optional[float] = None
    average_cadence: Optional[float] = None

    def __post_init__(self) -> None:
        _require_text("segment_id", self.segment_id)
        _require_int("elapsed_seconds", self.elapsed_seconds, minimum=1)
        _require_int("start_at", self.start_at)
        if not isinstance(self.pr_achieved, bool):
            raise RecordError(f"pr_achieved must be a bool, got {self.pr_achieved!r}")
        _optional_metric("average_watts", self.average_watts)
        _optional_metric("average_heartrate", self.average_heartrate)
        _optional_metric("average_cadence", self.average_cadence)


@dataclass(frozen=True)
class PerformanceRecord:
    """A candidate activity.

    ``efforts`` is ``None`` when only the activity summary is known and the
    full effort list still has to be fetched from the telemetry provider.
    ``start_date`` is kept as received; it is resolved when the validity
    window is checked.
    """

    activity_id: str
    start_date: Timestamp
    efforts: Optional[Tuple[EffortRecord, ...]] = None
    name: Optional[str] = None
    device_name: Optional[str] = None

    def __post_init__(self) -> None:
        _require_text("activity_id", self.activity_id)
        if self.efforts is not None and not all(
            isinstance(effort, EffortRecord) for effort in self.efforts
        ):
            raise RecordError("efforts must be EffortRecord instances")

    def efforts_on(self, segment_id: str) -> Tuple[EffortRecord, ...]:
        """Efforts on ``segment_id`` in recording order."""

        return tuple(effort for effort in self.efforts or () if effort.segment_id == segment_id)


@dataclass(frozen=True)
class WeekInfo:
    """A week joined with its segment metadata."""

    id: int
    season_id: int
    name: str
    segment_id: str
    required_laps: int
    start_at: int
    end_at: int
    multiplier: int
    segment_name: Optional[str] = None
    average_grade: Optional[float] = None
    notes: str = ""

    def __post_init__(self) -> None:
        _require_int("id", self.id)
        _require_int("season_id", self.season_id)
        _require_text("segment_id", self.segment_id)
        _require_int("required_laps", self.required_laps, minimum=1)
        _require_int("multiplier", self.multiplier, minimum=1)
        _require_int("start_at", self.start_at)
        _require_int("end_at", self.end_at)
        if self.average_grade is not None and not isinstance(self.average_grade, (int, float)):
            raise RecordError(f"average_grade must be numeric, got {self.average_grade!r}")

    @property
    def window(self) -> TimeWindow:
        return TimeWindow(self.start_at, self.end_at)


@dataclass(frozen=True)
class WeekResult:
    """A participant's stored result for one week, ready for scoring."""

    participant_id: str
    participant_name: str
    total_time_seconds: int
    pr_achieved: bool = False
    activity_id: Optional[int] = None
    external_activity_id: Optional[str] = None
    activity_start_at: Optional[int] = None
    device_name: Optional[str] = None

    def __post_init__(self) -> None:
        _require_text("participant_id", self.participant_id)
        _require_int("total_time_seconds", self.total_time_seconds, minimum=1)
        if not isinstance(self.pr_achieved, bool):
            raise RecordError(f"pr_achieved must be a bool, got {self.pr_achieved!r}")


def _as_id(value: Any, name: str) -> str:
    if value is None or isinstance(value, bool):
        raise RecordError(f"{name} is required")
    return str(value)


def _as_seconds(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise RecordError(f"{name} must be a number of seconds, got {value!r}")
    return int(value)


def effort_from_payload(payload: Mapping[str, Any]) -> EffortRecord:
    """Build an effort from a Strava ``segment_efforts`` item."""

    segment = payload.get("segment") or {}
    segment_id = segment.get("id") if isinstance(segment, Mapping) else None
    if segment_id is None:
        segment_id = payload.get("segment_id")
    return EffortRecord(
        segment_id=_as_id(segment_id, "segment id"),
        elapsed_seconds=_as_seconds(payload.get("elapsed_time"), "elapsed_time"),
        start_at=to_unix(payload.get("start_date")),
        pr_achieved=payload.get("pr_rank") == 1,
        effort_id=str(payload["id"]) if payload.get("id") is not None else None,
        average_watts=payload.get("average_watts"),
        average_heartrate=payload.get("average_heartrate"),
        average_cadence=payload.get("average_cadence"),
    )


def performance_from_payload(payload: Mapping[str, Any]) -> PerformanceRecord:
    """Build a candidate from a Strava-shaped activity payload.

    A payload without a ``segment_efforts`` key is a summary whose efforts
    must still be fetched.
    """

    if not isinstance(payload, Mapping):
        raise RecordError(f"activity payload must be an object, got {type(payload).__name__}")
    raw_efforts = payload.get("segment_efforts")
    efforts: Optional[Tuple[EffortRecord, ...]] = None
    if raw_efforts is not None:
        if not isinstance(raw_efforts, list):
            raise RecordError("segment_efforts must be a list")
        efforts = tuple(effort_from_payload(item) for item in raw_efforts)
    return PerformanceRecord(
        activity_id=_as_id(payload.get("id"), "activity id"),
        start_date=payload.get("start_date"),
        efforts=efforts,
        name=payload.get("name"),
        device_name=payload.get("device_name"),
    )


def effort_to_dict(effort: EffortRecord) -> Dict[str, Any]:
    return {
        "effort_id": effort.effort_id,
        "segment_id": effort.segment_id,
        "elapsed_seconds": effort.elapsed_seconds,
        "start_at": effort.start_at,
        "pr_achieved": effort.pr_achieved,
        "average_watts": effort.average_watts,
        "average_heartrate": effort.average_heartrate,
        "average_cadence": effort.average_cadence,
    }


__all__ = [
    "EffortRecord",
    "PerformanceRecord",
    "TimeWindow",
    "WeekInfo",
    "WeekResult",
    "effort_from_payload",
    "effort_to_dict",
    "performance_from_payload",
]
