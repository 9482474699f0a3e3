"""Storage backends for persisting scoring data.

This module provides:
- ScoreStore: Abstract base class for score storage
- StorageError: Raised on backend read/write failures
- FileManager: JSON file implementation for single-process use
- SQLScoreStore: Relational implementation with per-tool upserts
"""

from toolscore.storage.base import ScoreStore, StorageError
from toolscore.storage.permanent_storage.file_manager import FileManager
from toolscore.storage.sql import SQLScoreStore, create_session_factory, get_database_url

__all__ = [
    "FileManager",
    "SQLScoreStore",
    "ScoreStore",
    "StorageError",
    "create_session_factory",
    "get_database_url",
]
