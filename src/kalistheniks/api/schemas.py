"""
API schemas for request/response validation.

Pydantic models for all API endpoints. Domain entities are dataclasses;
the ``from_*`` helpers convert them for responses.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from ..models.training import PlanSuggestion, TrainingSession, TrainingSet, User


# ============================================================================
# Auth
# ============================================================================

class SignupRequest(BaseModel):
    """Request model for account registration."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # max_length counts characters; bcrypt limits the encoded bytes
        if len(value.encode("utf-8")) > 72:
            raise ValueError("password must be at most 72 bytes")
        return value


class LoginRequest(BaseModel):
    """Request model for login.

    No strength rules here: a password that could never have been set is
    simply wrong, and gets the same 401 as any other mismatch.
    """

    model_config = ConfigDict(extra="forbid")

    # Same normalisation as signup so stored and presented emails match
    email: EmailStr
    password: str = Field(..., max_length=1024)


class UserResponse(BaseModel):
    """Public view of a user; never includes the password hash."""

    id: str
    email: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, email=user.email, created_at=user.created_at)


class AuthResponse(BaseModel):
    """User plus bearer token."""

    user: UserResponse
    token: str


# ============================================================================
# Sessions and sets
# ============================================================================

class CreateSessionRequest(BaseModel):
    """Request model for creating a training session."""

    model_config = ConfigDict(extra="forbid")

    performed_at: Optional[datetime] = None
    session_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    notes: Optional[str] = Field(default=None, max_length=1000)


class CreateSetRequest(BaseModel):
    """Request model for adding a set to a session."""

    model_config = ConfigDict(extra="forbid")

    exercise_id: str = Field(..., min_length=1, max_length=64)
    set_index: int = Field(..., ge=0)
    reps: int = Field(..., ge=1, le=1000)
    weight_kg: float = Field(..., ge=0, le=1000)
    rpe: Optional[int] = Field(default=None, ge=1, le=10)


class SetResponse(BaseModel):
    id: str
    session_id: str
    exercise_id: str
    set_index: int
    reps: int
    weight_kg: float
    rpe: Optional[int] = None

    @classmethod
    def from_set(cls, training_set: TrainingSet) -> "SetResponse":
        return cls(
            id=training_set.id,
            session_id=training_set.session_id,
            exercise_id=training_set.exercise_id,
            set_index=training_set.set_index,
            reps=training_set.reps,
            weight_kg=training_set.weight_kg,
            rpe=training_set.rpe,
        )


class SessionResponse(BaseModel):
    id: str
    user_id: str
    performed_at: datetime
    notes: Optional[str] = None
    session_type: Optional[str] = None
    sets: List[SetResponse] = Field(default_factory=list)

    @classmethod
    def from_session(cls, session: TrainingSession) -> "SessionResponse":
        return cls(
            id=session.id,
            user_id=session.user_id,
            performed_at=session.performed_at,
            notes=session.notes,
            session_type=session.session_type,
            sets=[SetResponse.from_set(s) for s in session.sets],
        )


# ============================================================================
# Plan
# ============================================================================

class PlanSuggestionResponse(BaseModel):
    """Next suggested target."""

    exercise_id: str
    weight_kg: float
    reps: int
    notes: str = ""

    @classmethod
    def from_suggestion(cls, suggestion: PlanSuggestion) -> "PlanSuggestionResponse":
        return cls(
            exercise_id=suggestion.exercise_id,
            weight_kg=suggestion.weight_kg,
            reps=suggestion.reps,
            notes=suggestion.notes,
        )
