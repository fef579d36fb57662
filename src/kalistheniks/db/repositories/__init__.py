"""SQLite repositories backing the credential store."""

from .base import SQLiteRepository
from .user_repository import UserRepository
from .session_repository import SessionRepository

__all__ = [
    "SQLiteRepository",
    "UserRepository",
    "SessionRepository",
]
