"""FastAPI dependencies for the external collaborators."""

from __future__ import annotations

from typing import Iterator

from fastapi import Depends
from sqlmodel import Session

from ..core import get_session
from ..services.credentials import CredentialStore, TokenStore, strava_token_refresher
from ..services.profiles import ProfileCache, ProfileLookup, ProfilePictures
from ..services.telemetry import StravaClient, TelemetryProvider

# Shared by every request so pictures survive between leaderboard reads.
_profile_cache = ProfileCache()


def get_profile_cache() -> ProfileCache:
    return _profile_cache


def get_telemetry() -> Iterator[TelemetryProvider]:
    with StravaClient() as client:
        yield client


def get_credentials(session: Session = Depends(get_session)) -> CredentialStore:
    return TokenStore(session, refresher=strava_token_refresher)


def get_profile_lookup(
    cache: ProfileCache = Depends(get_profile_cache),
    credentials: CredentialStore = Depends(get_credentials),
    telemetry: TelemetryProvider = Depends(get_telemetry),
) -> ProfileLookup:
    return ProfilePictures(cache, credentials, telemetry)


__all__ = ["get_credentials", "get_profile_cache", "get_profile_lookup", "get_telemetry"]
