from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])

BANNER = "Movie/TV Database Backend API is running!"


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root():
    return BANNER


@router.get("/health")
async def health():
    return {"status": "ok"}
