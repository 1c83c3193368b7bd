from datetime import datetime, timedelta, timezone

import fakeredis
import fakeredis.aioredis
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm.session import Session

from app.core.config import Settings
from app.main import create_app
from app.models.clubs import Club


def future_iso(**delta) -> str:
    """ISO 8601 UTC timestamp offset from now (one day ahead by default)."""
    delta = delta or {"days": 1}
    return (datetime.now(timezone.utc) + timedelta(**delta)).isoformat().replace("+00:00", "Z")


@pytest.fixture
def settings() -> Settings:
    # Use an in-memory SQLite database for testing
    return Settings(
        app_env="test",
        database_url="sqlite:///:memory:",
        rate_limit_window_ms=60_000,
        rate_limit_max_requests=1000,
    )


@pytest.fixture
def fake_server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest.fixture
def fake_redis(fake_server: fakeredis.FakeServer):
    """Async client handed to the application."""
    return fakeredis.aioredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def redis_view(fake_server: fakeredis.FakeServer):
    """Sync client on the same fake server, for assertions outside the event loop."""
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def app(settings: Settings, fake_redis) -> FastAPI:
    return create_app(settings, redis_client=fake_redis)


@pytest.fixture
def client(app: FastAPI):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(app: FastAPI):
    """Session bound to the same store the application serves."""
    db: Session = app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def club(db_session: Session) -> Club:
    club = Club(name="Chess Club", description="Weekly games and puzzles")
    db_session.add(club)
    db_session.commit()
    db_session.refresh(club)
    return club
