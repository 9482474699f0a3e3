"""Relational storage backend (SQLAlchemy 2.0)."""

from toolscore.storage.sql.database import (
    Base,
    create_db_engine,
    create_session_factory,
    get_database_url,
)
from toolscore.storage.sql.sql_store import SQLScoreStore

__all__ = [
    "Base",
    "SQLScoreStore",
    "create_db_engine",
    "create_session_factory",
    "get_database_url",
]
