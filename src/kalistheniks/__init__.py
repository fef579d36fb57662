"""Workout tracking backend with token auth and progression suggestions."""

from .auth.token_codec import TokenCodec
from .models.training import PlanSuggestion, TrainingSession, TrainingSet, User
from .services.auth_service import AuthResult, AuthService
from .services.authorization import AuthorizationGate, CurrentUser
from .services.plan_service import PlanService
from .services.session_service import SessionService

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Auth core
    "TokenCodec",
    "AuthService",
    "AuthResult",
    "AuthorizationGate",
    "CurrentUser",
    # Training
    "SessionService",
    "PlanService",
    # Models
    "User",
    "TrainingSession",
    "TrainingSet",
    "PlanSuggestion",
]
