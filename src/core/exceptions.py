"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    USERNAME_NOT_FOUND = "USERNAME_NOT_FOUND"
    EDIT_SESSION_NOT_FOUND = "EDIT_SESSION_NOT_FOUND"

    # Conflict errors (409)
    USERNAME_TAKEN = "USERNAME_TAKEN"
    PROFILE_ALREADY_EXISTS = "PROFILE_ALREADY_EXISTS"
    SAVE_IN_PROGRESS = "SAVE_IN_PROGRESS"
    SESSION_NOT_READY = "SESSION_NOT_READY"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Upstream errors (502)
    GATEWAY_ERROR = "GATEWAY_ERROR"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ValidationError(AppException):
    """Input rejected locally, before any gateway call."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details={"field": field} if field else None,
        )


class GatewayError(AppException):
    """A backend gateway (auth, profile store, media) reported a failure."""

    def __init__(self, gateway: str, message: str) -> None:
        self.gateway = gateway
        super().__init__(
            error_code=ErrorCode.GATEWAY_ERROR,
            message=message,
            status_code=502,
            details={"gateway": gateway},
        )


class NotFoundError(AppException):
    """Referenced resource does not exist."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=404,
            details=details,
        )


class ProfileNotFoundError(NotFoundError):
    """Profile not found."""

    def __init__(self, identifier: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {identifier}",
            details={"identifier": identifier},
        )


class UsernameNotFoundError(NotFoundError):
    """No username is registered for the user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USERNAME_NOT_FOUND,
            message=f"No username registered for user: {user_id}",
            details={"user_id": user_id},
        )


class EditSessionNotFoundError(NotFoundError):
    """No open edit session for the user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EDIT_SESSION_NOT_FOUND,
            message="No open profile edit session",
            details={"user_id": user_id},
        )


class UsernameTakenError(AppException):
    """Username is already taken."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.USERNAME_TAKEN,
            message=f"Username already taken: {username}",
            status_code=409,
            details={"username": username},
        )


class ProfileAlreadyExistsError(AppException):
    """The user has already completed profile setup."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_ALREADY_EXISTS,
            message="A profile already exists for this account",
            status_code=409,
            details={"user_id": user_id},
        )


class SaveInProgressError(AppException):
    """A save is already outstanding for this edit session."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.SAVE_IN_PROGRESS,
            message="A save is already in progress",
            status_code=409,
        )


class SessionNotReadyError(AppException):
    """The edit session has not finished loading its profile."""

    def __init__(self, state: str) -> None:
        super().__init__(
            error_code=ErrorCode.SESSION_NOT_READY,
            message="Profile is not loaded yet",
            status_code=409,
            details={"state": state},
        )
