# backend/app/schemas/errors.py
"""
Pydantic schemas for error responses.

Every error the API returns uses one of these bodies. Built by the
exception handlers in main.py and the rate-limit handler.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """
    Standard error body: {"error", "message", "details"}.

    `error` is the exception class name (e.g. "PlatformNotFoundError"),
    so clients can branch on it without parsing the message.
    """

    error: str = Field(
        ...,
        description="Error type (e.g., 'InvalidFilterError')"
    )
    message: str = Field(
        ...,
        description="Human-readable error message"
    )
    details: dict | None = Field(
        default=None,
        description="Additional error context, such as the offending field"
    )


class ValidationErrorDetail(BaseModel):
    """Body of 422 responses: one entry per rejected query parameter."""

    error: str = Field(default="ValidationError")
    message: str = Field(default="Request validation failed")
    details: list[dict] = Field(
        ...,
        description="List of {field, message, type} entries"
    )
