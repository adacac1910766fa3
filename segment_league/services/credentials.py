"""Access tokens for reading a participant's telemetry."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Protocol

import httpx
from sqlmodel import Session

from ..core.config import (
    STRAVA_CLIENT_ID,
    STRAVA_CLIENT_SECRET,
    STRAVA_TIMEOUT_SECONDS,
    STRAVA_TOKEN_URL,
    TOKEN_EXPIRY_LEEWAY_SECONDS,
)
from ..core.errors import CredentialError, NotConnected, RefreshFailed
from ..core.logging import get_logger
from ..core.time import now_unix, utcnow
from ..models import ParticipantToken

logger = get_logger(__name__)

TokenRefresher = Callable[[str], Dict[str, Any]]


class CredentialStore(Protocol):
    def get_access_token(self, participant_id: str) -> str:
        ...


def strava_token_refresher(
    refresh_token: str,
    *,
    client_id: str = STRAVA_CLIENT_ID,
    client_secret: str = STRAVA_CLIENT_SECRET,
    token_url: str = STRAVA_TOKEN_URL,
    transport: Optional[httpx.BaseTransport] = None,
) -> Dict[str, Any]:
    """Exchange a refresh token for a new access token."""

    if not client_id or not client_secret:
        raise CredentialError("Strava client credentials are not configured")

    try:
        with httpx.Client(timeout=STRAVA_TIMEOUT_SECONDS, transport=transport) as client:
            response = client.post(
                token_url,
                data={
                    "client_id": client_id,
                    "client_secret": client_secret,
                    "grant_type": "refresh_token",
                    "refresh_token": refresh_token,
                },
            )
            response.raise_for_status()
            payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise CredentialError(str(exc)) from exc

    if not isinstance(payload, dict) or "access_token" not in payload or "expires_at" not in payload:
        raise CredentialError("token response is missing access_token/expires_at")
    return payload


class TokenStore:
    """Credential store backed by ``participant_token`` rows."""

    def __init__(
        self,
        session: Session,
        refresher: Optional[TokenRefresher] = None,
        clock: Callable[[], int] = now_unix,
    ) -> None:
        self._session = session
        self._refresher = refresher
        self._clock = clock

    def get_access_token(self, participant_id: str) -> str:
        token = self._session.get(ParticipantToken, participant_id)
        if token is None:
            raise NotConnected(participant_id)
        if token.expires_at > self._clock() + TOKEN_EXPIRY_LEEWAY_SECONDS:
            return token.access_token
        if self._refresher is None:
            raise RefreshFailed(participant_id, "token expired")

        try:
            refreshed = self._refresher(token.refresh_token)
        except CredentialError as exc:
            logger.warning("Token refresh for %s failed: %s", participant_id, exc)
            raise RefreshFailed(participant_id, str(exc)) from exc

        token.access_token = refreshed["access_token"]
        token.refresh_token = refreshed.get("refresh_token", token.refresh_token)
        token.expires_at = int(refreshed["expires_at"])
        token.updated_at = utcnow()
        self._session.add(token)
        self._session.commit()
        self._session.refresh(token)
        return token.access_token


__all__ = ["CredentialStore", "TokenRefresher", "TokenStore", "strava_token_refresher"]
