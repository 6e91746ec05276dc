from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from app.services.errors import NotFound

router = APIRouter(include_in_schema=False)


def _resolve(root: Path, rel: str) -> Path | None:
    candidate = (root / rel).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    return candidate


def resolve_static_path(root: Path, path: str) -> Path | None:
    """Map a request path onto the exported frontend.

    ``/view`` -> ``view.html`` when it exists, then the exact file, then
    ``index.html`` so client-side routes still load the app.
    """
    root = root.resolve()
    rel = path.strip("/") or "index.html"

    page = _resolve(root, rel + ".html")
    if page is not None and page.is_file():
        return page

    exact = _resolve(root, rel)
    if exact is not None and exact.is_file():
        return exact

    index = root / "index.html"
    if index.is_file():
        return index
    return None


@router.get("/{path:path}")
def serve_frontend(path: str, request: Request) -> FileResponse:
    if path == "api" or path.startswith("api/"):
        raise NotFound()
    target = resolve_static_path(Path(request.app.state.static_dir), path)
    if target is None:
        raise NotFound()
    return FileResponse(target)
