"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface: Abstract base class for database implementations
- SQLiteAdapter: SQLite-specific implementation (default)
- Session management: engine and session factory creation
- Repositories: the only code that talks to the database
"""

from clipbin.db.interface import DatabaseAdapter
from clipbin.db.session import create_session_maker, get_session_maker, init_models

__all__ = [
    "DatabaseAdapter",
    "create_session_maker",
    "get_session_maker",
    "init_models",
]
