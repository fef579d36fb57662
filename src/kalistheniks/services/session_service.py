"""Training session and set recording."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from .authorization import AuthorizationGate, CurrentUser
from ..db.repositories.session_repository import SessionRepository
from ..models.training import TrainingSession, TrainingSet

logger = logging.getLogger(__name__)


class SessionService:
    """Creates sessions, adds sets and lists a user's history.

    Every set insert is preceded by an ownership check through the gate.
    """

    def __init__(self, sessions: SessionRepository, gate: AuthorizationGate) -> None:
        self._sessions = sessions
        self._gate = gate

    def create_session(
        self,
        identity: CurrentUser,
        performed_at: Optional[datetime] = None,
        session_type: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> TrainingSession:
        """Create a session owned by ``identity``. Defaults to now (UTC)."""
        when = datetime.now(timezone.utc)
        if performed_at is not None:
            if performed_at.tzinfo is None:
                performed_at = performed_at.replace(tzinfo=timezone.utc)
            when = performed_at.astimezone(timezone.utc)

        session = TrainingSession(
            id=None,
            user_id=identity.user_id,
            performed_at=when,
            notes=notes,
            session_type=session_type,
        )
        return self._sessions.create(session)

    def add_set(
        self,
        identity: CurrentUser,
        session_id: str,
        exercise_id: str,
        set_index: int,
        reps: int,
        weight_kg: float,
        rpe: Optional[int] = None,
    ) -> TrainingSet:
        """Record a set in one of the caller's sessions.

        Raises:
            ForbiddenError: If the session is missing or not the caller's.
        """
        self._gate.authorize_session_access(identity, session_id)

        training_set = TrainingSet(
            id=None,
            session_id=session_id,
            exercise_id=exercise_id,
            set_index=set_index,
            reps=reps,
            weight_kg=weight_kg,
            rpe=rpe,
        )
        return self._sessions.add_set(training_set)

    def list_sessions(self, identity: CurrentUser) -> List[TrainingSession]:
        """The caller's sessions, newest first, with their sets."""
        return self._sessions.list_with_sets(identity.user_id)
