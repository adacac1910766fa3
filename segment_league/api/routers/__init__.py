"""Aggregate API routers."""

from fastapi import APIRouter

from .seasons import router as seasons_router
from .system import router as system_router
from .weeks import router as weeks_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    weeks_router,
    seasons_router,
)

__all__ = ["ALL_ROUTERS"]
