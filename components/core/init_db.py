"""Database initialization and dependency injection."""

from typing import AsyncGenerator

import fastapi
import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import ChangeFeed, QueryCache
from components.core.config import get_settings
from components.core.database import DatabaseManager
# Import all models to ensure they're registered
import components.user.models
import components.financial.models
import components.checklist.models
import components.modules.models
import components.discussions.models
import components.resources.models
import components.partner.models
import components.notifications.models

logger = structlog.get_logger(__name__)
settings = get_settings()

# Single instances shared by the whole process
db_manager = DatabaseManager()
change_feed = ChangeFeed()
query_cache = QueryCache(ttl_seconds=settings.CACHE_TTL_SECONDS)
query_cache.attach(change_feed)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting database sessions."""
    async with db_manager.get_db() as session:
        yield session


def get_cache() -> QueryCache:
    return query_cache


def get_feed() -> ChangeFeed:
    return change_feed


def init_db(app: fastapi.FastAPI) -> None:
    """Initialize database connection."""
    app.dependency_overrides[AsyncSession] = get_db

    @app.on_event("startup")
    async def create_tables() -> None:
        if settings.CREATE_TABLES_ON_STARTUP:
            await db_manager.create_tables()
            logger.info("tables_ready")

    @app.on_event("shutdown")
    async def close_engine() -> None:
        await db_manager.dispose()
