"""SQLite-backed repository for user accounts.

Provides the credential-store operations the auth core relies on:
creation, lookup by email and lookup by ID.
"""

import sqlite3
import uuid
from typing import Optional

from .base import SQLiteRepository, from_db_timestamp, to_db_timestamp, utc_now
from ...models.training import User


class UserRepository(SQLiteRepository):
    """
    SQLite-backed repository for User entities.

    Emails are stored and matched exactly as given (case-sensitive).
    """

    def _row_to_user(self, row: sqlite3.Row) -> User:
        """Convert a database row to a User entity."""
        return User(
            id=row["id"],
            email=row["email"],
            password_hash=row["password_hash"],
            created_at=from_db_timestamp(row["created_at"]),
            updated_at=from_db_timestamp(row["updated_at"]),
        )

    def create_user(self, email: str, password_hash: str) -> User:
        """
        Create a new user in the database.

        Args:
            email: User's email address (must be unique)
            password_hash: Bcrypt hash of the password

        Returns:
            The created User entity

        Raises:
            DuplicateRecordError: If the email already exists
            StoreUnavailableError: On any other database failure
        """
        user_id = str(uuid.uuid4())
        now = to_db_timestamp(utc_now())

        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO users (id, email, password_hash, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
            """, (user_id, email, password_hash, now, now))

        return User(
            id=user_id,
            email=email,
            password_hash=password_hash,
            created_at=from_db_timestamp(now),
            updated_at=from_db_timestamp(now),
        )

    def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Retrieve a user by their unique ID.

        Returns:
            The User entity if found, None otherwise
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE id = ?",
                (user_id,)
            ).fetchone()

            if row:
                return self._row_to_user(row)
            return None

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieve a user by their email address.

        Returns:
            The User entity if found, None otherwise
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE email = ?",
                (email,)
            ).fetchone()

            if row:
                return self._row_to_user(row)
            return None
