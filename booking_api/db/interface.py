"""
Datastore Backend Interface

A ``DatabaseAdapter`` knows how to build an async engine for one family of
databases. ``create_engine`` is shared; backends only describe their pool,
driver connect arguments and engine options.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import Pool


class DatabaseAdapter(ABC):
    """
    Base class for datastore backends.

    Adding a backend means subclassing this, filling in the four hooks
    below and teaching ``get_database_adapter`` its dialect name.
    """

    def create_engine(self, database_url: str, **kwargs) -> AsyncEngine:
        """
        Build the engine for ``database_url``.

        Keyword arguments override the backend's own engine options.
        """
        engine_kwargs = self.get_engine_kwargs()
        engine_kwargs.update(kwargs)

        pool_class = self.get_pool_class()
        if pool_class is not None:
            engine_kwargs["poolclass"] = pool_class

        return create_async_engine(
            database_url,
            connect_args=self.get_connect_args(),
            **engine_kwargs
        )

    @abstractmethod
    def get_pool_class(self) -> Optional[type[Pool]]:
        """Pool class for the engine, or None for the driver default."""

    @abstractmethod
    def get_connect_args(self) -> dict[str, Any]:
        """Arguments passed straight to the DBAPI ``connect`` call."""

    @abstractmethod
    def get_engine_kwargs(self) -> dict[str, Any]:
        """Extra ``create_async_engine`` options."""

    @abstractmethod
    def get_dialect_name(self) -> str:
        """SQLAlchemy dialect name, e.g. 'sqlite' or 'postgresql'."""
