"""
Identity service routes — register, login.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session
from core import identity

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=1)


class RegisterResponse(BaseModel):
    message: str
    uid: str


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    message: str
    token: str
    username: str


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=RegisterResponse)
async def register(
    req: RegisterRequest,
    request: Request,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Register a new user."""
    user = await identity.register(
        session,
        username=req.username,
        email=req.email,
        password=req.password,
        rounds=request.app.state.context.bcrypt_rounds,
    )
    return {"message": "registered", "uid": str(user.user_id)}


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    request: Request,
    session: AsyncSession = Depends(db_session),
) -> Dict[str, Any]:
    """Login with email + password."""
    result = await identity.login(
        session,
        request.app.state.context.tokens,
        email=req.email,
        password=req.password,
    )
    return {
        "message": "login successful",
        "token": result.token,
        "username": result.user.username,
    }
