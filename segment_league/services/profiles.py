"""Profile picture lookup with an explicit, injectable TTL cache."""

from __future__ import annotations

import time
from collections import OrderedDict
from typing import Callable, Dict, Iterable, Optional, Protocol, Tuple

from ..core.config import PROFILE_CACHE_MAX_ENTRIES, PROFILE_CACHE_TTL_SECONDS
from ..core.errors import LeagueError
from ..core.logging import get_logger
from .credentials import CredentialStore
from .telemetry import TelemetryProvider

logger = get_logger(__name__)


class ProfileCache:
    """Bounded key/value cache whose entries expire after ``ttl_seconds``.

    When more than ``max_entries`` are stored the least recently written
    entries are dropped first.
    """

    def __init__(
        self,
        ttl_seconds: float = PROFILE_CACHE_TTL_SECONDS,
        max_entries: int = PROFILE_CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0 or max_entries < 1:
            raise ValueError("ttl_seconds and max_entries must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, str]]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def put(self, key: str, value: str) -> None:
        self._entries[key] = (self._clock(), value)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def evict_expired(self) -> int:
        now = self._clock()
        expired = [key for key, (stored_at, _) in self._entries.items() if now - stored_at >= self.ttl_seconds]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()


class ProfileLookup(Protocol):
    def lookup(self, participant_ids: Iterable[str]) -> Dict[str, Optional[str]]:
        ...


class ProfilePictures:
    """Resolve profile picture URLs, each fetched with the athlete's own token."""

    def __init__(
        self,
        cache: ProfileCache,
        credentials: CredentialStore,
        telemetry: TelemetryProvider,
    ) -> None:
        self.cache = cache
        self._credentials = credentials
        self._telemetry = telemetry

    def _fetch(self, participant_id: str) -> Optional[str]:
        try:
            token = self._credentials.get_access_token(participant_id)
            profile = self._telemetry.get_athlete(token, participant_id)
        except LeagueError as exc:
            logger.warning("No profile picture for %s: %s", participant_id, exc)
            return None
        url = profile.get("profile") or profile.get("profile_medium")
        return url or None

    def lookup(self, participant_ids: Iterable[str]) -> Dict[str, Optional[str]]:
        pictures: Dict[str, Optional[str]] = {}
        for participant_id in participant_ids:
            url = self.cache.get(participant_id)
            if url is None:
                url = self._fetch(participant_id)
                if url:
                    self.cache.put(participant_id, url)
            pictures[participant_id] = url
        return pictures


__all__ = ["ProfileCache", "ProfileLookup", "ProfilePictures"]
