"""
Room service routes: list and create rooms.

Listing is public; creating a room requires a bearer token.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, require_user
from auth.models import AuthenticatedUser
from core import rooms

router = APIRouter(tags=["rooms"])


class CreateRoomRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class CreateRoomResponse(BaseModel):
    message: str
    id: str
    name: str


class RoomOut(BaseModel):
    id: str
    name: str
    owner_id: str
    created_at: Optional[str] = None


class RoomListResponse(BaseModel):
    rooms: List[RoomOut]


@router.get("/rooms", response_model=RoomListResponse)
async def list_rooms(
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """All rooms, newest first."""
    return {"rooms": [room.to_dict() for room in await rooms.list_rooms(session)]}


@router.post("/rooms", response_model=CreateRoomResponse)
async def create_room(
    req: CreateRoomRequest,
    caller: AuthenticatedUser = Depends(require_user),
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    room = await rooms.create_room(session, caller, req.name)
    return {"message": "room created", "id": str(room.room_id), "name": room.name}
