"""
Room creation and listing.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from auth.models import AuthenticatedUser
from core.errors import ValidationError
from database import helpers
from database.models import Room

logger = logging.getLogger(__name__)


async def create_room(
    session: AsyncSession,
    caller: Optional[AuthenticatedUser],
    name: str,
) -> Room:
    """Insert a room owned by the authenticated *caller*."""
    if caller is None:
        # require_user guards every route that reaches here
        raise RuntimeError("create_room called without an authenticated caller")
    if name is None or not name.strip():
        raise ValidationError("name is required")

    room = await helpers.insert_room(session, name=name, owner_id=caller.user_id)
    logger.info("Room %s (%r) created by %s", room.room_id, room.name, caller.user_id)
    return room


async def list_rooms(session: AsyncSession) -> List[Room]:
    return await helpers.list_rooms(session)
