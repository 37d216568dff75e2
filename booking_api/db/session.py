"""
Database Session Management with Connection Pooling

This module owns the process-scoped datastore handle. A ``Datastore`` is
created once when the application starts, stored on ``app.state`` and
handed to request handlers through FastAPI dependencies; nothing here is a
module-level singleton.

Key Features:
- Database abstraction: the adapter is chosen from the URL's dialect
- Connection pooling: configured per database type by the adapter
- Async session management: one session per request, committed on success
  and rolled back on exception
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from booking_api.db.sqlite_adapter import get_database_adapter

logger = logging.getLogger(__name__)


class Datastore:
    """
    Engine and session factory for one database.

    Usage:
        datastore = Datastore(settings.database_url)
        await datastore.connect()
        async with datastore.session() as session:
            ...
        await datastore.dispose()
    """

    def __init__(self, database_url: str):
        self.adapter = get_database_adapter(database_url)
        self.engine: AsyncEngine = self.adapter.create_engine(database_url)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=SQLModelAsyncSession,
            expire_on_commit=False,  # Prevents SQLAlchemy from expiring objects after commit
            autoflush=False,
        )

    async def connect(self) -> None:
        """Create the collections if they do not exist yet."""
        # Import registers the tables on SQLModel.metadata
        from booking_api.db import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Datastore ready (%s)", self.adapter.get_dialect_name())

    def session(self) -> AsyncSession:
        return self.session_maker()

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Datastore connections closed")


def get_datastore(request: Request) -> Datastore:
    """Dependency returning the datastore opened at application startup."""
    return request.app.state.datastore


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function for FastAPI to get a database session.

    This function:
    - Creates a new async session from the datastore's pool
    - Yields it to the endpoint
    - Commits on success, rolls back on exception

    Usage in FastAPI:
        @router.get("/endpoint")
        async def endpoint(session: AsyncSession = Depends(get_session)):
            ...
    """
    datastore = get_datastore(request)
    async with datastore.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
