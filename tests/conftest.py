from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlmodel import Session

from segment_league.api.deps import get_profile_cache
from segment_league.app import create_app
from segment_league.core import create_tables, get_session, make_engine
from segment_league.services.profiles import ProfileCache


@pytest.fixture
def engine() -> Iterator[Engine]:
    """Fresh in-memory database with every table created."""

    test_engine = make_engine("sqlite://")
    create_tables(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as db:
        yield db


@pytest.fixture
def client(engine: Engine) -> TestClient:
    """API client whose requests use the test database."""

    app = create_app()

    def _session() -> Iterator[Session]:
        with Session(engine) as db:
            yield db

    cache = ProfileCache()
    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_profile_cache] = lambda: cache
    return TestClient(app)
