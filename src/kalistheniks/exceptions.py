"""
Custom exceptions for the Kalistheniks API.

Every error that may cross the core boundary carries:
- A fixed, low-information message
- An error code for API responses
- HTTP status code mapping

Messages are constants per kind. Anti-enumeration depends on two failure
paths producing byte-identical errors, so callers never format internal
detail into them.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Authentication
    UNAUTHORIZED = "UNAUTHORIZED"
    TOKEN_INVALID = "TOKEN_INVALID"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    CREDENTIAL_CONFLICT = "CREDENTIAL_CONFLICT"

    # Storage
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class KalistheniksError(Exception):
    """
    Base exception for all Kalistheniks errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Authentication Errors (401)
# ============================================================================

class TokenInvalidError(KalistheniksError):
    """Raised when an identity token fails verification.

    ``reason`` records why (expired, algorithm, signature, malformed,
    claims) for internal logging only; it is never part of the message.
    """

    def __init__(self, reason: str = "invalid") -> None:
        super().__init__(
            message="invalid token",
            code=ErrorCode.TOKEN_INVALID,
            status_code=401,
        )
        self.reason = reason


class UnauthorizedError(KalistheniksError):
    """Raised by the authorization gate when a request has no usable identity."""

    MISSING_TOKEN = "missing token"
    INVALID_TOKEN = "invalid token"

    def __init__(self, message: str = INVALID_TOKEN) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


class InvalidCredentialsError(KalistheniksError):
    """Raised on login failure, whether the email is unknown or the password wrong."""

    def __init__(self) -> None:
        super().__init__(
            message="invalid credentials",
            code=ErrorCode.INVALID_CREDENTIALS,
            status_code=401,
        )


# ============================================================================
# Validation Errors (422)
# ============================================================================

class PasswordTooLongError(KalistheniksError):
    """Raised when a new password exceeds bcrypt's 72-byte input limit."""

    MAX_BYTES = 72

    def __init__(self) -> None:
        super().__init__(
            message="password must be at most 72 bytes",
            code=ErrorCode.VALIDATION_ERROR,
            status_code=422,
        )


# ============================================================================
# Conflict Errors (409)
# ============================================================================

class CredentialConflictError(KalistheniksError):
    """Raised when signup collides with an existing account."""

    def __init__(self) -> None:
        super().__init__(
            message="failed to create account",
            code=ErrorCode.CREDENTIAL_CONFLICT,
            status_code=409,
        )


# ============================================================================
# Forbidden / Not Found (404)
# ============================================================================

class ForbiddenError(KalistheniksError):
    """Raised when a session is missing or owned by someone else.

    Both cases map to the same 404 so callers cannot probe for other
    users' sessions.
    """

    def __init__(self) -> None:
        super().__init__(
            message="session not found",
            code=ErrorCode.NOT_FOUND,
            status_code=404,
        )


# ============================================================================
# Storage Errors (503)
# ============================================================================

class StoreUnavailableError(KalistheniksError):
    """Raised when the underlying store fails for an unclassified reason."""

    def __init__(self, operation: Optional[str] = None) -> None:
        super().__init__(
            message="storage unavailable",
            code=ErrorCode.STORE_UNAVAILABLE,
            status_code=503,
        )
        self.operation = operation


class DuplicateRecordError(Exception):
    """Raised by repositories when a unique constraint is violated.

    Internal to the store boundary; services translate it into a
    user-facing error.
    """
