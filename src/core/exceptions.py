"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    LINK_NOT_FOUND = "LINK_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TYPE_LOCKED = "TYPE_LOCKED"
    REORDER_MISMATCH = "REORDER_MISMATCH"
    EDITOR_STATE = "EDITOR_STATE"

    # Conflict errors (409)
    USERNAME_TAKEN = "USERNAME_TAKEN"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500/503)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


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


class FieldValidationError(AppException):
    """A single field failed validation.

    ``errors`` holds every ``(field, reason)`` pair found; ``field`` and
    ``reason`` mirror the first one so callers checking a single field do not
    have to dig through the list.
    """

    def __init__(
        self,
        field: str,
        reason: str,
        errors: list[dict[str, str]] | None = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        self.field = field
        self.reason = reason
        self.errors = errors or [{"field": field, "reason": reason}]
        super().__init__(
            error_code=error_code,
            message=f"Invalid {field}: {reason}",
            status_code=400,
            details=self.errors,
        )


class TypeLockedError(FieldValidationError):
    """Attempt to switch an existing entry between link and product."""

    def __init__(self) -> None:
        super().__init__("type", "locked", error_code=ErrorCode.TYPE_LOCKED)
        self.message = "Type cannot be changed once a link exists"


class ReorderMismatchError(AppException):
    """Submitted order is not a permutation of the current links."""

    def __init__(self, missing: list[str], unexpected: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.REORDER_MISMATCH,
            message="Link order must list every link exactly once",
            status_code=400,
            details={"missing": missing, "unexpected": unexpected},
        )


class EditorStateError(AppException):
    """Editor operation invoked from a state that does not allow it."""

    def __init__(self, operation: str, state: str) -> None:
        super().__init__(
            error_code=ErrorCode.EDITOR_STATE,
            message=f"Cannot {operation} while editor is {state}",
            status_code=409,
            details={"operation": operation, "state": state},
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, key: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {key}",
            status_code=404,
            details={"profile": key},
        )


class LinkNotFoundError(AppException):
    """Link not found."""

    def __init__(self, link_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.LINK_NOT_FOUND,
            message=f"Link not found: {link_id}",
            status_code=404,
            details={"link_id": link_id},
        )


class UsernameTakenError(AppException):
    """Username is already used by another profile."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.USERNAME_TAKEN,
            message=f"Username already taken: {username}",
            status_code=409,
            details={"field": "username", "reason": "taken", "username": username},
        )


class StoreError(AppException):
    """The backing store failed; the client may retry."""

    def __init__(self, operation: str, message: str = "Storage backend unavailable") -> None:
        super().__init__(
            error_code=ErrorCode.DATABASE_ERROR,
            message=message,
            status_code=503,
            details={"operation": operation, "retryable": True},
        )
