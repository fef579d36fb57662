"""Authentication API routes: signup and login.

Failures are raised as KalistheniksError subclasses and rendered by the
exception handlers, so both login failure paths produce the same body.
"""

from fastapi import APIRouter, Depends, status

from ..deps import get_auth_service
from ..schemas import AuthResponse, LoginRequest, SignupRequest, UserResponse
from ...services.auth_service import AuthService


router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    credentials: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a new account and return it with a token."""
    result = auth_service.signup(credentials.email, credentials.password)
    return AuthResponse(user=UserResponse.from_user(result.user), token=result.token)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Authenticate and return a fresh token."""
    result = auth_service.login(credentials.email, credentials.password)
    return AuthResponse(user=UserResponse.from_user(result.user), token=result.token)
