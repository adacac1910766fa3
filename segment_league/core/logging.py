"""Logging setup for the league package."""

from __future__ import annotations

import logging
import sys

from .config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
PACKAGE_LOGGER = "segment_league"


def _configure_stream_handler() -> logging.Handler:
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._is_league_stream = True  # type: ignore[attr-defined]
    return handler


def _package_logger() -> logging.Logger:
    package = logging.getLogger(PACKAGE_LOGGER)
    if not any(getattr(handler, "_is_league_stream", False) for handler in package.handlers):
        package.addHandler(_configure_stream_handler())
    package.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    # Records stop at the package handler so a root handler does not repeat them.
    package.propagate = False
    return package


def get_logger(name: str) -> logging.Logger:
    """Return a logger whose records go to stderr once, through the package logger."""

    _package_logger()
    return logging.getLogger(name)


__all__ = ["PACKAGE_LOGGER", "get_logger"]
