"""
Database Adapters

SQLiteAdapter is the default backend: a single file, no server, a good fit
for local development, tests and single-instance deployments.
ServerAdapter covers client/server databases reached through an async
SQLAlchemy driver, using the driver's default pool with pre-ping.
"""

from typing import Any, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool, Pool

from booking_api.db.interface import DatabaseAdapter


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter implementation.

    - NullPool: a connection per unit of work, the file does the locking
    - check_same_thread=False: required for async SQLite operations
    """

    def get_pool_class(self) -> type[NullPool]:
        return NullPool

    def get_connect_args(self) -> dict[str, Any]:
        return {
            "check_same_thread": False
        }

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False  # Set to True only for SQL debugging in development
        }

    def get_dialect_name(self) -> str:
        return "sqlite"


class ServerAdapter(DatabaseAdapter):
    """
    Adapter for client/server databases.

    The engine keeps a pooled set of connections shared by all requests;
    pre-ping drops connections the server has closed.
    """

    def __init__(self, dialect: str):
        self.dialect = dialect

    def get_pool_class(self) -> Optional[type[Pool]]:
        return None

    def get_connect_args(self) -> dict[str, Any]:
        return {}

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False,
            "pool_pre_ping": True,
        }

    def get_dialect_name(self) -> str:
        return self.dialect


def get_database_adapter(database_url: str) -> DatabaseAdapter:
    """
    Pick the adapter matching the connection string's dialect.

    Args:
        database_url: SQLAlchemy connection string

    Returns:
        DatabaseAdapter instance
    """
    dialect = make_url(database_url).get_backend_name()
    if dialect == "sqlite":
        return SQLiteAdapter()
    return ServerAdapter(dialect)
