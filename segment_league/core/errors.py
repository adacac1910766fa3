"""Exception hierarchy shared by the scoring core and its adapters."""

from __future__ import annotations


class LeagueError(Exception):
    """Base class for every error raised by the league package."""


class InvalidInput(LeagueError):
    """Caller supplied a value the core cannot work with."""


class InvalidTimestamp(InvalidInput):
    """A timestamp could not be resolved to an absolute instant."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Unparseable timestamp: {value!r}")
        self.value = value


class RecordError(LeagueError):
    """A stored row or inbound payload does not have the expected shape."""


class InsufficientData(LeagueError):
    """Fewer efforts were recorded than the week requires."""

    def __init__(self, found: int, required: int) -> None:
        super().__init__(f"Insufficient repetitions: found {found}, need {required}")
        self.found = found
        self.required = required


class NotFound(LeagueError):
    """Requested entity does not exist."""


class CredentialError(LeagueError):
    """No usable bearer credential for a participant."""


class NotConnected(CredentialError):
    def __init__(self, participant_id: str) -> None:
        super().__init__(f"Participant {participant_id} is not connected")
        self.participant_id = participant_id


class RefreshFailed(CredentialError):
    def __init__(self, participant_id: str, reason: str) -> None:
        super().__init__(f"Token refresh failed for {participant_id}: {reason}")
        self.participant_id = participant_id
        self.reason = reason


class TelemetryError(LeagueError):
    """The telemetry provider could not supply the requested data."""


__all__ = [
    "CredentialError",
    "InsufficientData",
    "InvalidInput",
    "InvalidTimestamp",
    "LeagueError",
    "NotConnected",
    "NotFound",
    "RecordError",
    "RefreshFailed",
    "TelemetryError",
]
