"""Domain entities for users, training sessions, sets and plan suggestions."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class User:
    """User entity representing an account holder."""

    id: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class TrainingSet:
    """A single set performed within a training session."""

    id: Optional[str]
    session_id: str
    exercise_id: str
    set_index: int
    reps: int
    weight_kg: float
    rpe: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass
class TrainingSession:
    """A training session owned by a user.

    ``session_type`` is an open string; "upper" and "lower" drive the
    alternation note in plan suggestions, other values are stored as-is.
    """

    id: Optional[str]
    user_id: str
    performed_at: datetime
    notes: Optional[str] = None
    session_type: Optional[str] = None
    sets: List[TrainingSet] = field(default_factory=list)


@dataclass
class PlanSuggestion:
    """Derived next-workout target. Never persisted."""

    exercise_id: str
    weight_kg: float
    reps: int
    notes: str = ""
