"""
Typed values produced by token verification.

``SessionClaims`` is the decoded content of a bearer token and is never
stored. ``AuthenticatedUser`` is what the authorization gate hands to a
protected handler.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SessionClaims(BaseModel):
    model_config = ConfigDict(frozen=True)

    subject: uuid.UUID
    username: str
    issued_at: datetime | None = None
    expires_at: datetime


class AuthenticatedUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: uuid.UUID
    username: str
    claims: SessionClaims

    @classmethod
    def from_claims(cls, claims: SessionClaims) -> "AuthenticatedUser":
        return cls(user_id=claims.subject, username=claims.username, claims=claims)
