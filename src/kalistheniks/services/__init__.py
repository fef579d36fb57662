"""Business services: authentication, authorization, sessions and planning."""

from .auth_service import AuthResult, AuthService
from .authorization import AuthorizationGate, CurrentUser
from .plan_service import PlanService
from .session_service import SessionService

__all__ = [
    "AuthResult",
    "AuthService",
    "AuthorizationGate",
    "CurrentUser",
    "PlanService",
    "SessionService",
]
