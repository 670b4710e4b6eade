"""
Request-scoped database sessions for the planner routes.

The factory on app.state is built with expire_on_commit=False: the NullPool
engine hands the connection back on commit, so a trip or participant read
after commit must not try to refresh itself.

Any exception escaping the route body rolls back whatever the request left
uncommitted before the session closes; the exception still propagates to the
envelope handlers.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    factory: async_sessionmaker = request.app.state.db_session_factory
    async with factory() as session:
        try:
            yield session
        except Exception as exc:
            logger.warning(
                "db_session_rolled_back path=%s error=%s",
                request.url.path,
                type(exc).__name__,
            )
            await session.rollback()
            raise
