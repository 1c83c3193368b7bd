import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from redis.asyncio import Redis

from app.core.config import Settings
from app.core.errors import install_error_handlers
from app.core.rate_limit import RateLimitMiddleware
from app.core.redis_config import get_redis_client
from app.database.db import init_db, make_engine, make_session_factory
from app.routes import clubs, events, health

logger = logging.getLogger("app")

STATIC_DIR = Path(__file__).parent / "static"


def create_app(settings: Optional[Settings] = None, *, redis_client: Optional[Redis] = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    owns_redis = settings.rate_limit_enabled and redis_client is None
    if owns_redis:
        redis_client = get_redis_client(settings)

    engine = make_engine(settings.sqlalchemy_url)
    # Create all tables (in production, use migrations such as Alembic)
    init_db(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Environment: %s", settings.app_env)
        if settings.rate_limit_enabled:
            logger.info(
                "Rate limiting: %s requests per %s minutes",
                settings.rate_limit_max_requests,
                settings.rate_limit_window_ms / 1000 / 60,
            )
        yield
        logger.info("Shutting down, closing database connections")
        engine.dispose()
        if owns_redis:
            await redis_client.aclose()

    app = FastAPI(
        title="Club Events API",
        description="API for managing clubs and their scheduled events",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    if settings.rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            redis_client=redis_client,
            window_ms=settings.rate_limit_window_ms,
            max_requests=settings.rate_limit_max_requests,
        )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app, verbose=settings.is_development)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    @app.get("/", include_in_schema=False)
    def index():
        return FileResponse(STATIC_DIR / "index.html")

    # Include the routers
    app.include_router(health.router)
    app.include_router(clubs.router)
    app.include_router(events.router)

    return app


if __name__ == "__main__":
    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
