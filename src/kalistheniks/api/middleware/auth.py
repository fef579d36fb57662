"""Authentication dependencies for FastAPI.

Bridges the Authorization header to the authorization gate and binds the
verified identity to the request.
"""

from typing import Optional

from fastapi import Depends, Request

from ..deps import get_authorization_gate
from ...services.authorization import AuthorizationGate, CurrentUser

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header.

    Returns an empty string when the header is absent or uses another scheme.
    The scheme match is case-sensitive: ``bearer x`` is treated as missing.
    """
    if authorization and len(authorization) > len(BEARER_PREFIX) and authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):].strip()
    return ""


def get_current_user(
    request: Request,
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> CurrentUser:
    """FastAPI dependency to get the current authenticated user.

    Raises:
        UnauthorizedError: If no token is provided or the token is invalid.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    current_user = gate.authenticate(token)
    request.state.user_id = current_user.user_id
    return current_user
