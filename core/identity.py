"""
Registration and login.

The plaintext password and its hash are never logged or returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenIssuer
from auth.password import MAX_PASSWORD_BYTES, hash_password, verify_password
from core.errors import AuthError, ValidationError
from database.helpers import get_user_by_email, insert_user
from database.models import User

logger = logging.getLogger(__name__)

LOGIN_FAILED = "invalid email or password"


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


def _require(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    return value


async def register(
    session: AsyncSession,
    username: str,
    email: str,
    password: str,
    rounds: int = 12,
) -> User:
    """
    Create a new identity with a bcrypt-hashed password.

    Raises ``ValidationError`` for empty fields and ``ConflictError`` when the
    username or email is already registered (the caller is not told which).
    """
    _require(username, "username")
    _require(email, "email")
    _require(password, "password")
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")

    user = await insert_user(
        session,
        username=username,
        email=email,
        password_hash=hash_password(password, rounds=rounds),
    )
    logger.info("Registered user %s (%s)", user.username, user.user_id)
    return user


async def login(
    session: AsyncSession,
    issuer: TokenIssuer,
    email: str,
    password: str,
) -> LoginResult:
    """
    Check *email* / *password* and mint a session token.

    Unknown accounts and wrong passwords fail with the same ``AuthError``.
    """
    _require(email, "email")
    _require(password, "password")

    user = await get_user_by_email(session, email)
    if user is None:
        logger.info("Login failed: no account for the given email")
        raise AuthError(LOGIN_FAILED)
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: wrong password for %s", user.user_id)
        raise AuthError(LOGIN_FAILED)

    token = issuer.issue(user.user_id, user.username)
    logger.info("Login: %s (%s)", user.username, user.user_id)
    return LoginResult(token=token, user=user)
