"""
Database helper functions for the credential store and room registry.

Every write is a single insert committed on its own, so a failure never
leaves partial state behind. Uniqueness of ``username`` / ``email`` is left
to the database constraints, which keeps concurrent registrations safe
without application-level locking.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ConflictError, StorageError
from database.models import Room, User

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


async def insert_user(
    session: AsyncSession,
    username: str,
    email: str,
    password_hash: str,
) -> User:
    """Insert a new ``User``. Raises ``ConflictError`` if username or email is taken."""
    user = User(
        user_id=uuid.uuid4(),
        username=username,
        email=email,
        password_hash=password_hash,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.info("Registration conflict for username=%s: %s", username, type(exc.orig).__name__)
        raise ConflictError() from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Insert into users failed")
        raise StorageError() from exc
    return user


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    try:
        result = await session.execute(select(User).where(User.email == email))
    except SQLAlchemyError as exc:
        logger.exception("Lookup in users failed")
        raise StorageError() from exc
    return result.scalar_one_or_none()


async def insert_room(
    session: AsyncSession,
    name: str,
    owner_id: str | uuid.UUID,
) -> Room:
    """Insert a new ``Room`` owned by *owner_id*."""
    room = Room(room_id=uuid.uuid4(), name=name, owner_id=_to_uuid(owner_id))
    session.add(room)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Insert into rooms failed (owner=%s)", owner_id)
        raise StorageError("failed to create room") from exc
    return room


async def list_rooms(session: AsyncSession) -> List[Room]:
    """All rooms, most recently created first."""
    try:
        result = await session.execute(
            select(Room).order_by(Room.created_at.desc(), Room.room_id.desc())
        )
    except SQLAlchemyError as exc:
        logger.exception("Listing rooms failed")
        raise StorageError() from exc
    return list(result.scalars().all())
