"""Training session API routes."""

from typing import List

from fastapi import APIRouter, Depends, status

from ..deps import get_session_service
from ..middleware.auth import get_current_user
from ..schemas import (
    CreateSessionRequest,
    CreateSetRequest,
    SessionResponse,
    SetResponse,
)
from ...services.authorization import CurrentUser
from ...services.session_service import SessionService


router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=List[SessionResponse])
def list_sessions(
    current_user: CurrentUser = Depends(get_current_user),
    session_service: SessionService = Depends(get_session_service),
) -> List[SessionResponse]:
    """List the caller's sessions with their sets, newest first."""
    sessions = session_service.list_sessions(current_user)
    return [SessionResponse.from_session(s) for s in sessions]


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(
    payload: CreateSessionRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """Start a new training session for the caller."""
    session = session_service.create_session(
        current_user,
        performed_at=payload.performed_at,
        session_type=payload.session_type,
        notes=payload.notes,
    )
    return SessionResponse.from_session(session)


@router.post("/{session_id}/sets", response_model=SetResponse, status_code=status.HTTP_201_CREATED)
def create_set(
    session_id: str,
    payload: CreateSetRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session_service: SessionService = Depends(get_session_service),
) -> SetResponse:
    """Add a set to one of the caller's sessions.

    Someone else's session and a missing session both return 404.
    """
    training_set = session_service.add_set(
        current_user,
        session_id=session_id,
        exercise_id=payload.exercise_id,
        set_index=payload.set_index,
        reps=payload.reps,
        weight_kg=payload.weight_kg,
        rpe=payload.rpe,
    )
    return SetResponse.from_set(training_set)
