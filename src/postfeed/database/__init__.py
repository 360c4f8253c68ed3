"""
Database module for postfeed backend
"""

from .connection import (
    check_database_connection,
    create_tables,
    dispose_database,
    get_async_engine,
    get_async_session,
    init_database,
    reset_database,
)

__all__ = [
    "check_database_connection",
    "create_tables",
    "dispose_database",
    "get_async_engine",
    "get_async_session",
    "init_database",
    "reset_database",
]
