"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel


class FieldErrorDetail(BaseModel):
    """One rejected input field."""

    field: str
    reason: str


class ErrorResponse(BaseModel):
    """Standardized error response.

    ``details`` is a list of field errors for validation failures and an
    object for everything else (e.g. ``{"link_id": ...}`` or
    ``{"retryable": true}``).
    """

    error_code: str
    message: str
    details: list[FieldErrorDetail] | dict[str, Any] | None = None
