import logging
import time

import redis
from fastapi import Request
from fastapi.responses import JSONResponse
from redis.asyncio import Redis
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.schemas.envelope import error_body

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window request limit per client address, counted in Redis.
    The counter key for a window expires together with the window.
    """

    def __init__(self, app, *, redis_client: Redis, window_ms: int, max_requests: int):
        super().__init__(app)
        self.redis_client = redis_client
        self.window_ms = window_ms
        self.max_requests = max_requests

    async def _hit(self, client: str) -> int:
        window = int(time.time() * 1000) // self.window_ms
        key = f"rate_limit:{client}:{window}"
        async with self.redis_client.pipeline() as pipe:
            pipe.incr(key)
            pipe.pexpire(key, self.window_ms)
            count, _ = await pipe.execute()
        return int(count)

    async def dispatch(self, request: Request, call_next):
        client = request.client.host if request.client else "unknown"
        try:
            count = await self._hit(client)
        except redis.exceptions.RedisError as e:
            logger.warning("Rate limiter unavailable, letting request through: %s", e)
            return await call_next(request)

        headers = {
            "X-RateLimit-Limit": str(self.max_requests),
            "X-RateLimit-Remaining": str(max(self.max_requests - count, 0)),
        }
        if count > self.max_requests:
            logger.info("Rate limit exceeded for %s", client)
            return JSONResponse(status_code=429, content=error_body(RATE_LIMIT_MESSAGE), headers=headers)

        response: Response = await call_next(request)
        response.headers.update(headers)
        return response
