"""Strava API client supplying activities and their segment efforts."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

import httpx

from ..core.config import STRAVA_API_BASE, STRAVA_TIMEOUT_SECONDS
from ..core.errors import TelemetryError
from .records import PerformanceRecord, performance_from_payload

PAGE_SIZE = 100


class TelemetryProvider(Protocol):
    def list_activities(self, access_token: str, after: int, before: int) -> List[PerformanceRecord]:
        ...

    def get_activity(self, access_token: str, activity_id: str) -> PerformanceRecord:
        ...

    def get_athlete(self, access_token: str, athlete_id: str) -> Dict[str, Any]:
        ...


class StravaClient:
    """Synchronous Strava client.

    Transport errors and non-2xx responses surface as :class:`TelemetryError`.
    Rate limiting and retries belong to the caller.
    """

    def __init__(
        self,
        base_url: str = STRAVA_API_BASE,
        timeout: float = STRAVA_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "StravaClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get(self, access_token: str, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = self._client.get(
                path,
                headers={"Authorization": f"Bearer {access_token}"},
                params=params or {},
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise TelemetryError(f"GET {path} returned {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise TelemetryError(f"GET {path} failed: {exc}") from exc

    def list_activities(self, access_token: str, after: int, before: int) -> List[PerformanceRecord]:
        """Activity summaries started between ``after`` and ``before``."""

        activities: List[PerformanceRecord] = []
        page = 1
        while True:
            batch = self._get(
                access_token,
                "/athlete/activities",
                params={"after": after, "before": before, "page": page, "per_page": PAGE_SIZE},
            )
            if not isinstance(batch, list):
                raise TelemetryError("activity list response is not a list")
            for item in batch:
                if not isinstance(item, dict):
                    raise TelemetryError("activity list item is not an object")
                summary = dict(item)
                # Summaries never carry efforts; they are loaded per activity.
                summary.pop("segment_efforts", None)
                activities.append(performance_from_payload(summary))
            if len(batch) < PAGE_SIZE:
                return activities
            page += 1

    def get_activity(self, access_token: str, activity_id: str) -> PerformanceRecord:
        payload = self._get(
            access_token,
            f"/activities/{activity_id}",
            params={"include_all_efforts": "true"},
        )
        if not isinstance(payload, dict):
            raise TelemetryError(f"activity {activity_id} response is not an object")
        payload.setdefault("segment_efforts", [])
        return performance_from_payload(payload)

    def get_athlete(self, access_token: str, athlete_id: str) -> Dict[str, Any]:
        payload = self._get(access_token, f"/athletes/{athlete_id}")
        if not isinstance(payload, dict):
            raise TelemetryError(f"athlete {athlete_id} response is not an object")
        return payload


__all__ = ["PAGE_SIZE", "StravaClient", "TelemetryProvider"]
