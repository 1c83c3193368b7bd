"""
Test the Redis-backed rate limiter.
"""
import pytest
import redis
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.rate_limit import RATE_LIMIT_MESSAGE
from app.core.redis_config import get_redis_client
from app.main import create_app


@pytest.fixture
def limited_settings() -> Settings:
    return Settings(
        app_env="test",
        database_url="sqlite:///:memory:",
        rate_limit_window_ms=3_600_000,
        rate_limit_max_requests=3,
    )


class TestRateLimit:
    """Test request limiting per client."""

    def test_requests_within_limit(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.headers["X-RateLimit-Limit"] == "1000"
        assert response.headers["X-RateLimit-Remaining"] == "999"

    def test_requests_over_limit(self, limited_settings: Settings, fake_redis):
        app = create_app(limited_settings, redis_client=fake_redis)

        with TestClient(app) as client:
            statuses = [client.get("/clubs").status_code for _ in range(4)]
            response = client.get("/health")

        assert statuses == [200, 200, 200, 429]
        assert response.status_code == 429
        assert response.json() == {"success": False, "message": RATE_LIMIT_MESSAGE}
        assert response.headers["X-RateLimit-Remaining"] == "0"

    def test_counter_expires_with_window(self, limited_settings: Settings, fake_redis, redis_view):
        app = create_app(limited_settings, redis_client=fake_redis)

        with TestClient(app) as client:
            client.get("/health")

        keys = redis_view.keys("rate_limit:*")
        assert len(keys) == 1
        assert 0 < redis_view.pttl(keys[0]) <= 3_600_000

    def test_redis_unavailable_lets_requests_through(self, limited_settings: Settings):
        class BrokenRedis:
            def pipeline(self):
                raise redis.exceptions.ConnectionError("connection refused")

        app = create_app(limited_settings, redis_client=BrokenRedis())

        with TestClient(app) as client:
            statuses = [client.get("/health").status_code for _ in range(5)]

        assert statuses == [200] * 5

    def test_rate_limit_disabled(self, fake_redis, redis_view):
        settings = Settings(database_url="sqlite:///:memory:", rate_limit_enabled=False, rate_limit_max_requests=1)
        app = create_app(settings, redis_client=fake_redis)

        with TestClient(app) as client:
            statuses = [client.get("/health").status_code for _ in range(3)]

        assert statuses == [200, 200, 200]
        assert redis_view.keys("rate_limit:*") == []

    def test_client_uses_configured_url_and_timeouts(self):
        settings = Settings(redis_url="redis://cache:6380/2", redis_timeout_seconds=0.25)
        client = get_redis_client(settings)

        kwargs = client.connection_pool.connection_kwargs
        assert kwargs["host"] == "cache"
        assert kwargs["port"] == 6380
        assert kwargs["db"] == 2
        assert kwargs["socket_connect_timeout"] == 0.25
        assert kwargs["socket_timeout"] == 0.25
