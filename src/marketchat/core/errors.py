"""Failure taxonomy shared by the messaging components.

Every failure carries a stable machine-readable ``kind`` and a human-readable
``message``. Clients use ``retryable`` to tell transient faults apart from
request errors that will fail again unchanged.
"""

from __future__ import annotations

from typing import Any, ClassVar

__all__ = [
    "MessagingError",
    "ValidationError",
    "NotFoundError",
    "PermissionDeniedError",
    "TransientError",
]


class MessagingError(Exception):
    """Base class for every failure raised by the messaging core."""

    kind: ClassVar[str] = "error"
    status_code: ClassVar[int] = 500
    retryable: ClassVar[bool] = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, Any]:
        """Return the typed error result sent to clients."""
        return {
            "kind": self.kind,
            "message": self.message,
            "retryable": self.retryable,
        }


class ValidationError(MessagingError):
    """Request is malformed: empty body, self-messaging, bad pagination."""

    kind = "validation"
    status_code = 400


class NotFoundError(MessagingError):
    """Referenced user, book, message, conversation or block does not exist."""

    kind = "not_found"
    status_code = 404

    def __init__(self, resource: str, message: str | None = None) -> None:
        super().__init__(message or f"{resource} not found")
        self.resource = resource

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["resource"] = self.resource
        return payload


class PermissionDeniedError(MessagingError):
    """Viewer may not perform the action (blocked by recipient, foreign data)."""

    kind = "permission_denied"
    status_code = 403


class TransientError(MessagingError):
    """Store unreachable or too slow; safe for the caller to retry with backoff."""

    kind = "transient"
    status_code = 503
    retryable = True
