"""Progression engine: next-workout suggestion from the last recorded set.

Rules, applied to the most recent set:
- reps >= 12: add 2.5 kg, keep reps
- reps <= 6: keep weight, target 5 reps
- otherwise: keep both

The most recent session's type ("upper"/"lower") adds an alternation note.
"""

import logging
import uuid

from ..db.repositories.session_repository import SessionRepository
from ..models.training import PlanSuggestion

logger = logging.getLogger(__name__)

UPPER_REP_RANGE = 12
LOWER_REP_RANGE = 6
WEIGHT_INCREMENT_KG = 2.5

DEFAULT_WEIGHT_KG = 20.0
DEFAULT_REPS = 8

NOTE_NO_HISTORY = "No history found; starting default weight and reps."
NOTE_INCREASE = "Hit upper range; increase weight."
NOTE_REDUCE = "Fell short; keep weight, reduce reps."
NOTE_MAINTAIN = "Maintain weight and rep target."

ALTERNATION_NOTES = {
    "upper": " Next: switch to lower body.",
    "lower": " Next: switch to upper body.",
}


class PlanService:
    """Derives plan suggestions. Assumes the caller is already authorized."""

    def __init__(self, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def next_suggestion(self, user_id: str) -> PlanSuggestion:
        """Suggest the next target for ``user_id``.

        Raises:
            StoreUnavailableError: If the last-set lookup fails.
        """
        last_set = self._sessions.get_last_set(user_id)
        if last_set is None:
            return PlanSuggestion(
                exercise_id=str(uuid.uuid4()),
                weight_kg=DEFAULT_WEIGHT_KG,
                reps=DEFAULT_REPS,
                notes=NOTE_NO_HISTORY,
            )

        suggestion = PlanSuggestion(
            exercise_id=last_set.exercise_id,
            weight_kg=last_set.weight_kg,
            reps=last_set.reps,
        )

        if last_set.reps >= UPPER_REP_RANGE:
            suggestion.weight_kg = last_set.weight_kg + WEIGHT_INCREMENT_KG
            suggestion.notes = NOTE_INCREASE
        elif last_set.reps <= LOWER_REP_RANGE:
            suggestion.reps = LOWER_REP_RANGE - 1
            suggestion.notes = NOTE_REDUCE
        else:
            suggestion.notes = NOTE_MAINTAIN

        suggestion.notes += self._alternation_note(user_id)
        return suggestion

    def _alternation_note(self, user_id: str) -> str:
        # A failed lookup only costs the note, never the suggestion.
        try:
            last_session = self._sessions.get_last_session(user_id)
        except Exception as e:
            logger.warning(f"Last session lookup failed, omitting alternation note: {e!r}")
            return ""

        if last_session is None or last_session.session_type is None:
            return ""
        return ALTERNATION_NOTES.get(last_session.session_type, "")
