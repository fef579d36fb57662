"""Dependency injection for API routes."""

from datetime import timedelta
from functools import lru_cache

from ..auth.token_codec import TokenCodec
from ..config import get_settings
from ..db.repositories.session_repository import SessionRepository
from ..db.repositories.user_repository import UserRepository
from ..services.auth_service import AuthService
from ..services.authorization import AuthorizationGate
from ..services.plan_service import PlanService
from ..services.session_service import SessionService


@lru_cache
def get_user_repository() -> UserRepository:
    """Get the user repository instance."""
    settings = get_settings()
    return UserRepository(str(settings.database_path))


@lru_cache
def get_session_repository() -> SessionRepository:
    """Get the session repository instance."""
    settings = get_settings()
    return SessionRepository(str(settings.database_path))


@lru_cache
def get_token_codec() -> TokenCodec:
    """Get the token codec, keyed with the configured secret."""
    settings = get_settings()
    return TokenCodec(
        secret=settings.jwt_secret_key,
        ttl=timedelta(hours=settings.token_ttl_hours),
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )


@lru_cache
def get_auth_service() -> AuthService:
    """Get the auth service instance."""
    return AuthService(users=get_user_repository(), codec=get_token_codec())


@lru_cache
def get_authorization_gate() -> AuthorizationGate:
    """Get the authorization gate instance."""
    settings = get_settings()
    return AuthorizationGate(
        auth_service=get_auth_service(),
        users=get_user_repository(),
        sessions=get_session_repository(),
        require_existing_user=settings.auth_require_existing_user,
    )


@lru_cache
def get_session_service() -> SessionService:
    """Get the session service instance."""
    return SessionService(sessions=get_session_repository(), gate=get_authorization_gate())


@lru_cache
def get_plan_service() -> PlanService:
    """Get the plan service instance."""
    return PlanService(sessions=get_session_repository())


def reset_dependencies() -> None:
    """Drop all cached instances so they are rebuilt from current settings."""
    for getter in (
        get_user_repository,
        get_session_repository,
        get_token_codec,
        get_auth_service,
        get_authorization_gate,
        get_session_service,
        get_plan_service,
    ):
        getter.cache_clear()
