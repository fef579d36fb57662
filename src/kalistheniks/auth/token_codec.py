"""Signed identity tokens (JWT, HS256).

The codec is pure computation: it holds an injected secret and settings,
touches no storage and keeps no state between calls.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from ..exceptions import TokenInvalidError

logger = logging.getLogger(__name__)

# The only signing algorithm ever accepted. Not configurable.
ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(hours=24)
DEFAULT_ISSUER = "kalistheniks-api"
DEFAULT_AUDIENCE = "kalistheniks-users"

REQUIRED_CLAIMS = ["sub", "exp", "iat", "jti", "iss", "aud"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """Issues and verifies time-bound identity assertions.

    Args:
        secret: Symmetric signing key.
        ttl: Lifetime of an issued token, fixed at issuance.
        issuer: Value of the ``iss`` claim.
        audience: Value of the ``aud`` claim.
        clock: Source of "now" for issuance. Verification always uses
            wall-clock time.
    """

    def __init__(
        self,
        secret: str | bytes,
        ttl: timedelta = DEFAULT_TTL,
        issuer: str = DEFAULT_ISSUER,
        audience: str = DEFAULT_AUDIENCE,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._issuer = issuer
        self._audience = audience
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, subject: str) -> str:
        """Create a signed token for ``subject``.

        Returns:
            Encoded JWT string.
        """
        now = self._clock()
        payload = {
            "sub": subject,
            "iat": now,
            "exp": now + self._ttl,
            "jti": str(uuid.uuid4()),
            "iss": self._issuer,
            "aud": self._audience,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> str:
        """Validate a token and return its subject.

        Expiry is strict: a token is rejected once ``now >= exp``.

        Raises:
            TokenInvalidError: For any failure. ``reason`` on the exception
                says which check failed; the message never does.
        """
        try:
            header = jwt.get_unverified_header(token)
        except jwt.PyJWTError:
            raise TokenInvalidError("malformed")

        if header.get("alg") != ALGORITHM:
            raise TokenInvalidError("algorithm")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                leeway=0,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise TokenInvalidError("expired")
        except jwt.InvalidAlgorithmError:
            raise TokenInvalidError("algorithm")
        except jwt.InvalidSignatureError:
            raise TokenInvalidError("signature")
        except jwt.DecodeError:
            raise TokenInvalidError("malformed")
        except jwt.PyJWTError as e:
            logger.debug(f"Token claims rejected: {type(e).__name__}")
            raise TokenInvalidError("claims")

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise TokenInvalidError("claims")
        return subject
