from __future__ import annotations

from fastapi import APIRouter

from app.schemas.texts import HelloResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/hello", response_model=HelloResponse)
def hello() -> HelloResponse:
    return HelloResponse(message="hello from textcopy api")
