"""Authentication service for signup, login and token verification.

This is the only place that hashes passwords or mints tokens.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

import bcrypt

from ..auth.token_codec import TokenCodec
from ..db.repositories.user_repository import UserRepository
from ..exceptions import (
    CredentialConflictError,
    DuplicateRecordError,
    InvalidCredentialsError,
    PasswordTooLongError,
)
from ..models.training import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """A user together with a freshly issued token."""

    user: User
    token: str


@lru_cache(maxsize=1)
def _dummy_password_hash() -> bytes:
    # Compared against on unknown-email logins so both failure paths pay
    # for one bcrypt check.
    return bcrypt.hashpw(b"kalistheniks-dummy-password", bcrypt.gensalt())


class AuthService:
    """Service for handling authentication operations.

    Args:
        users: Credential store for user records.
        codec: Token codec holding the signing secret.
    """

    def __init__(self, users: UserRepository, codec: TokenCodec) -> None:
        self._users = users
        self._codec = codec
        # Build the dummy hash now so the first unknown-email login does
        # not also pay for salt generation and hashing.
        _dummy_password_hash()

    def signup(self, email: str, password: str) -> AuthResult:
        """Register a new account and issue its first token.

        Raises:
            PasswordTooLongError: If the password exceeds 72 bytes.
            CredentialConflictError: If the email is already registered.
            StoreUnavailableError: If the store fails otherwise.
        """
        password_hash = self.hash_password(password)

        try:
            user = self._users.create_user(email, password_hash)
        except DuplicateRecordError:
            logger.info("Signup rejected: account already exists")
            raise CredentialConflictError()

        token = self._codec.issue(user.id)
        logger.info(f"Created user {user.id}")
        return AuthResult(user=user, token=token)

    def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and issue a fresh token.

        Unknown email and wrong password raise the same error.

        Raises:
            InvalidCredentialsError: On any credential mismatch.
            StoreUnavailableError: If the store fails.
        """
        user = self._users.get_by_email(email)

        if user is None:
            self._check_password(password, _dummy_password_hash())
            raise InvalidCredentialsError()

        if not self._check_password(password, user.password_hash.encode("utf-8")):
            raise InvalidCredentialsError()

        token = self._codec.issue(user.id)
        return AuthResult(user=user, token=token)

    def verify_token(self, token: str) -> str:
        """Verify a token and return its subject (the user ID).

        Raises:
            TokenInvalidError: If the token fails any check.
        """
        return self._codec.verify(token)

    @staticmethod
    def _check_password(password: str, hashed: bytes) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed)
        except ValueError:
            # Not a bcrypt hash, or a password over bcrypt's 72-byte limit
            return False

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt with a fresh salt.

        Args:
            password: The plaintext password to hash.

        Returns:
            The bcrypt hash as a string.

        Raises:
            PasswordTooLongError: If the UTF-8 encoding exceeds 72 bytes.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > PasswordTooLongError.MAX_BYTES:
            raise PasswordTooLongError()
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(encoded, salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Returns:
            True if the password matches, False otherwise.
        """
        return AuthService._check_password(password, hashed_password.encode("utf-8"))
