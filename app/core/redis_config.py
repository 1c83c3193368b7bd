import redis.asyncio as redis

from app.core.config import Settings


def get_redis_client(settings: Settings) -> redis.Redis:
    """Get an async Redis client for rate-limit counters."""
    return redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_connect_timeout=settings.redis_timeout_seconds,
        socket_timeout=settings.redis_timeout_seconds,
    )
