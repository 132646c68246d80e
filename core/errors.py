"""
Error taxonomy shared by both services.

These carry no transport details; ``api.errors`` maps them onto HTTP.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base class. ``message`` is safe to return to clients."""

    default_message = "request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Malformed or missing input the client can fix."""

    default_message = "invalid request"


class AuthError(ServiceError):
    """Bad credentials, or a missing / invalid / expired token."""

    default_message = "authentication failed"


class ConflictError(ServiceError):
    """A uniqueness constraint rejected the write."""

    default_message = "registration failed"


class StorageError(ServiceError):
    """The persistence layer failed."""

    default_message = "storage failure"


class TokenSigningError(ServiceError):
    """A token could not be minted."""

    default_message = "token generation failed"
