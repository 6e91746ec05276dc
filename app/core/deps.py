from __future__ import annotations

from fastapi import Request

from app.services.store import TextStore


def get_store(request: Request) -> TextStore:
    return request.app.state.store
