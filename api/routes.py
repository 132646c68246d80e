"""
Routes shared by both services.
"""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> Dict[str, str]:
    return {"status": "ok", "service": request.app.title}
