from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError

from app.core.deps import get_store
from app.schemas.texts import (
    ErrorResponse,
    TextCreatedResponse,
    TextResponse,
    TextUpdatedResponse,
    TextUpdateRequest,
)
from app.services.errors import InvalidInput
from app.services.store import TextStore

router = APIRouter(
    prefix="/api/texts",
    tags=["texts"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)


@router.post("", response_model=TextCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_text(store: TextStore = Depends(get_store)) -> TextCreatedResponse:
    return TextCreatedResponse(code=store.create())


@router.get("/{code}", response_model=TextResponse)
def get_text(code: str, store: TextStore = Depends(get_store)) -> TextResponse:
    entry = store.get(code)
    return TextResponse(code=code, text=entry.text)


@router.put("/{code}", response_model=TextUpdatedResponse)
async def update_text(
    code: str,
    request: Request,
    store: TextStore = Depends(get_store),
) -> TextUpdatedResponse:
    # Code syntax and existence are checked before the body is decoded
    store.get(code)
    try:
        payload = TextUpdateRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        raise InvalidInput("invalid json")
    return TextUpdatedResponse(code=store.update(code, payload.text))
