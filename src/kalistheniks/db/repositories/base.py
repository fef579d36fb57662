"""Shared SQLite plumbing for the repositories."""

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

from ..schema import SCHEMA
from ...exceptions import DuplicateRecordError, StoreUnavailableError

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_db_timestamp(value: datetime) -> str:
    """Serialize a datetime so that lexical order matches time order.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def from_db_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


class SQLiteRepository:
    """
    Base class for SQLite-backed repositories.

    Each operation opens its own connection, commits on success and rolls
    back on error. SQLite failures are translated at this boundary:
    unique-constraint violations become DuplicateRecordError and every
    other database error becomes StoreUnavailableError.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize the repository.

        Args:
            db_path: Path to SQLite database file. If None, uses the
                    DATABASE_PATH environment variable or kalistheniks.db
                    in the working directory.
        """
        if db_path:
            self.db_path = Path(db_path)
        else:
            self.db_path = Path(os.environ.get("DATABASE_PATH", "kalistheniks.db"))

        self._ensure_schema()

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        """Get database connection with context manager."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            logger.error(f"Could not open database {self.db_path}: {e}")
            raise StoreUnavailableError("connect") from e

        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if "UNIQUE" in str(e):
                raise DuplicateRecordError(str(e)) from e
            logger.error(f"Integrity error: {e}")
            raise StoreUnavailableError("write") from e
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error: {e}")
            raise StoreUnavailableError() from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        """Ensure all tables exist."""
        with self._get_connection() as conn:
            conn.executescript(SCHEMA)
