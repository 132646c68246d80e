"""
JWT token creation and verification.

Tokens are standard JWTs signed with a symmetric HMAC key (``HS256`` by
default) carrying ``sub`` (user id), ``username``, ``iat`` and ``exp``.
The key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``) and
must be the same for every service that verifies tokens.

Verification is pure: no database lookup happens, so a token stays valid
until it expires.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone

import jwt

from auth.models import SessionClaims
from core.errors import AuthError, TokenSigningError

logger = logging.getLogger(__name__)

SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")
REQUIRED_CLAIMS = ["sub", "exp", "username"]


class TokenIssuer:
    """Mints and verifies signed session tokens with one shared key."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiry_seconds: int = 86400,
    ) -> None:
        if not secret:
            raise ValueError("token signing key must not be empty")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"unsupported signing algorithm: {algorithm}")
        if expiry_seconds <= 0:
            raise ValueError("token expiry must be positive")
        self._secret = secret
        self.algorithm = algorithm
        self.expiry_seconds = expiry_seconds

    def issue(
        self,
        user_id: uuid.UUID | str,
        username: str,
        now: float | None = None,
    ) -> str:
        """Create a signed token for *user_id* expiring ``expiry_seconds`` from *now*."""
        issued_at = int(now if now is not None else time.time())
        payload = {
            "sub": str(user_id),
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.expiry_seconds,
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            logger.error("Token signing failed for %s: %s", user_id, type(exc).__name__)
            raise TokenSigningError() from exc

    def verify(self, token: str, now: float | None = None) -> SessionClaims:
        """
        Verify *token* and return its claims.

        Expiry is checked against *now* (unix seconds) when given, otherwise
        against the current time. Raises ``AuthError`` on a bad signature, a
        tampered payload, an expired ``exp``, or a missing / malformed claim.
        """
        options = {"require": REQUIRED_CLAIMS}
        if now is not None:
            options["verify_exp"] = False
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options=options,
            )
            if now is not None and int(payload["exp"]) <= now:
                raise jwt.ExpiredSignatureError("Signature has expired")
            return SessionClaims(
                subject=uuid.UUID(str(payload["sub"])),
                username=str(payload["username"]),
                issued_at=_from_timestamp(payload.get("iat")),
                expires_at=_from_timestamp(payload["exp"]),
            )
        except jwt.ExpiredSignatureError as exc:
            logger.debug("Rejected expired token")
            raise AuthError("invalid or expired token") from exc
        except (jwt.InvalidTokenError, ValueError, TypeError) as exc:
            logger.debug("Rejected invalid token: %s", type(exc).__name__)
            raise AuthError("invalid or expired token") from exc


def _from_timestamp(value) -> datetime | None:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)
