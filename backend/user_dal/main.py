"""user-dal API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserDalError → structured JSON responses
    - Database, schema and store initialized on startup via lifespan context manager
    - Engine disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store and session manager kept on app.state, not module globals
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from user_dal.api.error_handlers import register_error_handlers
from user_dal.api.routes import health, users
from user_dal.config import get_settings
from user_dal.infrastructure.database import DatabaseSessionManager
from user_dal.infrastructure.identity import SystemClock, UuidGenerator
from user_dal.infrastructure.observability import setup_logging
from user_dal.infrastructure.user_repository import SqlUserRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await db_manager.create_schema()
    app.state.db_manager = db_manager
    app.state.user_store = SqlUserRepository(
        db_manager, UuidGenerator(), SystemClock(),
    )
    logger.info(f"{settings.service_name} {settings.service_version} started")
    yield
    logger.info(f"{settings.service_name} shutting down")
    await db_manager.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.service_name,
        version=settings.service_version,
        lifespan=lifespan,
    )
    app.include_router(health.info_router)
    app.include_router(health.router)
    app.include_router(users.router)
    register_error_handlers(app)
    return app


app = create_app()
