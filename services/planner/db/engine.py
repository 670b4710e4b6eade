"""
AsyncEngine factory for the asyncpg driver.

NullPool because PgBouncer owns connection pooling in deployed environments;
SA should not maintain its own pool on top.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from services.planner.config import Settings, get_settings


def create_engine(settings: Settings | None = None) -> AsyncEngine:
    """Create an async engine on the asyncpg driver."""
    settings = settings or get_settings()
    url = settings.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return create_async_engine(
        url,
        poolclass=NullPool,
        echo=settings.debug and settings.environment == "development",
    )
