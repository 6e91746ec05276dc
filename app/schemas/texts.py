from __future__ import annotations

from pydantic import BaseModel


class TextCreatedResponse(BaseModel):
    code: str


class TextUpdateRequest(BaseModel):
    # Missing, null and empty are all rejected by the store as "text is required"
    text: str | None = None


class TextUpdatedResponse(BaseModel):
    code: str


class TextResponse(BaseModel):
    code: str
    text: str


class ErrorResponse(BaseModel):
    error: str


class HelloResponse(BaseModel):
    message: str
