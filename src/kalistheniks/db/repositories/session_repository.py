"""SQLite-backed repository for training sessions and sets."""

import sqlite3
import uuid
from typing import Dict, List, Optional

from .base import SQLiteRepository, from_db_timestamp, to_db_timestamp, utc_now
from ...models.training import TrainingSession, TrainingSet


class SessionRepository(SQLiteRepository):
    """
    SQLite-backed repository for TrainingSession and TrainingSet entities.

    Also answers the ownership question (does this session belong to this
    user?) that guards every set insert.
    """

    def _row_to_session(self, row: sqlite3.Row) -> TrainingSession:
        return TrainingSession(
            id=row["id"],
            user_id=row["user_id"],
            performed_at=from_db_timestamp(row["performed_at"]),
            notes=row["notes"],
            session_type=row["session_type"],
        )

    def _row_to_set(self, row: sqlite3.Row) -> TrainingSet:
        return TrainingSet(
            id=row["id"],
            session_id=row["session_id"],
            exercise_id=row["exercise_id"],
            set_index=row["set_index"],
            reps=row["reps"],
            weight_kg=row["weight_kg"],
            rpe=row["rpe"],
            created_at=from_db_timestamp(row["created_at"]),
        )

    def create(self, session: TrainingSession) -> TrainingSession:
        """
        Insert a session and return it with its generated ID.

        Args:
            session: Session to persist; its ``id`` is ignored

        Returns:
            The stored TrainingSession
        """
        session_id = str(uuid.uuid4())
        performed_at = to_db_timestamp(session.performed_at)

        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO sessions (id, user_id, performed_at, notes, session_type)
                VALUES (?, ?, ?, ?, ?)
            """, (
                session_id,
                session.user_id,
                performed_at,
                session.notes,
                session.session_type,
            ))

        return TrainingSession(
            id=session_id,
            user_id=session.user_id,
            performed_at=from_db_timestamp(performed_at),
            notes=session.notes,
            session_type=session.session_type,
        )

    def add_set(self, training_set: TrainingSet) -> TrainingSet:
        """
        Insert a set and return it with its generated ID and timestamp.

        Ownership of the parent session is not checked here; callers go
        through the authorization gate first.
        """
        set_id = str(uuid.uuid4())
        created_at = to_db_timestamp(utc_now())

        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO sets
                (id, session_id, exercise_id, set_index, reps, weight_kg, rpe, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                set_id,
                training_set.session_id,
                training_set.exercise_id,
                training_set.set_index,
                training_set.reps,
                training_set.weight_kg,
                training_set.rpe,
                created_at,
            ))

        return TrainingSet(
            id=set_id,
            session_id=training_set.session_id,
            exercise_id=training_set.exercise_id,
            set_index=training_set.set_index,
            reps=training_set.reps,
            weight_kg=training_set.weight_kg,
            rpe=training_set.rpe,
            created_at=from_db_timestamp(created_at),
        )

    def list_with_sets(self, user_id: str) -> List[TrainingSession]:
        """
        List a user's sessions, newest first, each with its sets in order.
        """
        if not user_id:
            raise ValueError("user_id cannot be empty")

        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT s.id AS s_id, s.user_id, s.performed_at, s.notes, s.session_type,
                       st.id, st.session_id, st.exercise_id, st.set_index,
                       st.reps, st.weight_kg, st.rpe, st.created_at
                FROM sessions s
                LEFT JOIN sets st ON st.session_id = s.id
                WHERE s.user_id = ?
                ORDER BY s.performed_at DESC, s.id, st.set_index ASC
            """, (user_id,)).fetchall()

        sessions: Dict[str, TrainingSession] = {}
        for row in rows:
            session = sessions.get(row["s_id"])
            if session is None:
                session = TrainingSession(
                    id=row["s_id"],
                    user_id=row["user_id"],
                    performed_at=from_db_timestamp(row["performed_at"]),
                    notes=row["notes"],
                    session_type=row["session_type"],
                )
                sessions[row["s_id"]] = session
            if row["id"] is not None:
                session.sets.append(self._row_to_set(row))

        # dicts keep insertion order, which follows the ORDER BY above
        return list(sessions.values())

    def get_last_set(self, user_id: str) -> Optional[TrainingSet]:
        """
        Most recently recorded set across all of the user's sessions.

        Ordered by creation time, ties broken by set index descending.

        Returns:
            The TrainingSet if the user has any history, None otherwise
        """
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT st.*
                FROM sets st
                JOIN sessions s ON st.session_id = s.id
                WHERE s.user_id = ?
                ORDER BY st.created_at DESC, st.set_index DESC
                LIMIT 1
            """, (user_id,)).fetchone()

            if row:
                return self._row_to_set(row)
            return None

    def get_last_session(self, user_id: str) -> Optional[TrainingSession]:
        """
        The user's session with the latest ``performed_at``.

        Returns:
            The TrainingSession if found, None otherwise
        """
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT id, user_id, performed_at, notes, session_type
                FROM sessions
                WHERE user_id = ?
                ORDER BY performed_at DESC
                LIMIT 1
            """, (user_id,)).fetchone()

            if row:
                return self._row_to_session(row)
            return None

    def session_belongs_to_user(self, session_id: str, user_id: str) -> bool:
        """
        Check whether a session exists and is owned by the given user.

        A missing session and a session owned by someone else both
        return False.
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM sessions WHERE id = ? AND user_id = ?",
                (session_id, user_id)
            ).fetchone()
            return row is not None
