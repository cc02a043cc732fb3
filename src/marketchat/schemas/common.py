"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Typed failure result; ``kind`` is stable across releases."""

    kind: str = Field(..., description="validation, not_found, permission_denied or transient")
    message: str
    retryable: bool = False
    resource: str | None = None


class ErrorResponse(BaseModel):
    error: ErrorDetail


# OpenAPI documentation for the typed failures every chat route can return.
ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Validation failed"},
    403: {"model": ErrorResponse, "description": "Permission denied"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    503: {"model": ErrorResponse, "description": "Store unavailable, retry later"},
}
