"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface: Abstract base class for database implementations
- SQLiteAdapter / ServerAdapter: concrete engine configuration
- Datastore: process-scoped engine and session factory
- Session management: per-request session dependency
"""

from booking_api.db.interface import DatabaseAdapter
from booking_api.db.session import Datastore, get_datastore, get_session

__all__ = [
    "DatabaseAdapter",
    "Datastore",
    "get_datastore",
    "get_session",
]
