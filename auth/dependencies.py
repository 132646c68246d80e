"""
FastAPI dependencies for authentication.

Provides ``db_session`` and ``require_user`` dependencies. ``require_user``
is the authorization gate: it verifies the bearer token and hands the
handler an ``AuthenticatedUser``. It never touches the database.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenIssuer
from auth.models import AuthenticatedUser
from core.errors import AuthError
from database.session import get_db_session


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        raise AuthError("missing token")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthError("missing token")
    return parts[1]


def authenticate(
    authorization: Optional[str],
    issuer: TokenIssuer,
    now: Optional[float] = None,
) -> AuthenticatedUser:
    token = extract_bearer_token(authorization)
    return AuthenticatedUser.from_claims(issuer.verify(token, now=now))


async def require_user(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
) -> AuthenticatedUser:
    """
    Extract and verify the Bearer token, returning the authenticated
    caller. Raises ``AuthError`` (401) when the header is missing,
    malformed, or the token does not verify.
    """
    return authenticate(authorization, request.app.state.context.tokens)
