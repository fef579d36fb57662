"""Authorization gate: bearer token to identity, and session ownership checks.

Per request the gate moves Unauthenticated -> Verifying -> Authenticated or
Rejected, and for resource operations Authenticated -> CheckingOwnership ->
Authorized or Forbidden. Nothing is cached between calls.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .auth_service import AuthService
from ..db.repositories.session_repository import SessionRepository
from ..db.repositories.user_repository import UserRepository
from ..exceptions import ForbiddenError, TokenInvalidError, UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """The verified identity a request acts as."""

    user_id: str


class AuthorizationGate:
    """Authenticates bearer tokens and guards session mutations.

    Args:
        auth_service: Verifies tokens.
        users: Used to confirm a token's subject still exists.
        sessions: Answers session ownership queries.
        require_existing_user: Reject validly signed tokens whose subject
            has no user row.
    """

    def __init__(
        self,
        auth_service: AuthService,
        users: UserRepository,
        sessions: SessionRepository,
        require_existing_user: bool = True,
    ) -> None:
        self._auth_service = auth_service
        self._users = users
        self._sessions = sessions
        self._require_existing_user = require_existing_user

    def authenticate(self, bearer_token: Optional[str]) -> CurrentUser:
        """Resolve a bearer token into the calling identity.

        Raises:
            UnauthorizedError: "missing token" when nothing was presented,
                "invalid token" for every verification failure.
        """
        if not bearer_token:
            raise UnauthorizedError(UnauthorizedError.MISSING_TOKEN)

        try:
            user_id = self._auth_service.verify_token(bearer_token)
        except TokenInvalidError as e:
            logger.debug(f"Token rejected: {e.reason}")
            raise UnauthorizedError(UnauthorizedError.INVALID_TOKEN)

        if self._require_existing_user and self._users.get_by_id(user_id) is None:
            logger.debug("Token rejected: subject has no user record")
            raise UnauthorizedError(UnauthorizedError.INVALID_TOKEN)

        return CurrentUser(user_id=user_id)

    def authorize_session_access(self, identity: CurrentUser, session_id: str) -> None:
        """Require that ``session_id`` is owned by ``identity``.

        A missing session and someone else's session raise the same error.

        Raises:
            ForbiddenError: If the caller does not own the session.
        """
        if not self._sessions.session_belongs_to_user(session_id, identity.user_id):
            raise ForbiddenError()
