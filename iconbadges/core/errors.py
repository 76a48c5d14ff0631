"""Error taxonomy shared by services and the HTTP layer.

Every error carries the HTTP status it maps to, a human readable message and
the ``body`` echoed back to the caller in the error envelope::

    {"type": "error", "message": "...", "body": {...}}
"""
from __future__ import annotations

from typing import Any


class IconBadgeError(Exception):
    """Base class for errors surfaced to HTTP callers."""

    status_code: int = 500
    default_message: str = "Internal server error."

    def __init__(self, message: str | None = None, body: Any = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        self.body = body
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        return {"type": "error", "message": self.message, "body": self.body}


class ValidationError(IconBadgeError):
    """A required field was missing or empty."""

    status_code = 400
    default_message = "Bad request."


class ConflictError(IconBadgeError):
    """The slug is already used by a curated, custom or upstream icon."""

    status_code = 409
    default_message = "This slug is already in use."


class IconNotFoundError(IconBadgeError):
    status_code = 404
    default_message = "Icon not found."


class UpstreamError(IconBadgeError):
    """The badge service refused to render the submitted icon."""

    default_message = "There was an error with your request."

    @classmethod
    def from_status(cls, status: int, reason: str, body: Any = None) -> "UpstreamError":
        if status == 414:
            return cls("The icon you uploaded is too big.", body=body, status_code=status)
        return cls(
            f"There was an error with your request. Status: {status} - {reason}.",
            body=body,
            status_code=status,
        )


class TransportError(IconBadgeError):
    """The upstream service or the icon store could not be reached."""

    status_code = 502
    default_message = "The badge service could not be reached."


__all__ = [
    "IconBadgeError",
    "ValidationError",
    "ConflictError",
    "IconNotFoundError",
    "UpstreamError",
    "TransportError",
]
