"""API assembly helpers."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core import InvalidInput, LeagueError, NotFound, get_logger
from .routers import ALL_ROUTERS

logger = get_logger(__name__)


async def _league_error_handler(request: Request, exc: LeagueError) -> JSONResponse:
    if isinstance(exc, NotFound):
        status = 404
    elif isinstance(exc, InvalidInput):
        status = 400
    else:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        status = 500
    return JSONResponse({"detail": str(exc)}, status_code=status)


def register_routes(app: FastAPI) -> None:
    """Attach all application routers and the core error mapping to the given app."""

    app.add_exception_handler(LeagueError, _league_error_handler)
    for router in ALL_ROUTERS:
        app.include_router(router)


__all__ = ["register_routes"]
