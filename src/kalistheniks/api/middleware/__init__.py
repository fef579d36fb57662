"""API middleware modules."""

from .auth import (
    extract_bearer_token,
    get_current_user,
)
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "extract_bearer_token",
    "get_current_user",
    "SecurityHeadersMiddleware",
]
