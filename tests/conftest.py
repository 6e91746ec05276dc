import os
import tempfile
from pathlib import Path

_static_dir = Path(tempfile.mkdtemp(prefix="textrelay_static_"))
(_static_dir / "index.html").write_text("<html>home</html>", encoding="utf-8")
(_static_dir / "view.html").write_text("<html>view</html>", encoding="utf-8")
(_static_dir / "_next").mkdir()
(_static_dir / "_next" / "app.js").write_text("console.log('app')", encoding="utf-8")

os.environ.setdefault("STATIC_DIR", str(_static_dir))
os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("TEXT_TTL_SECONDS", "3600")

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.store import TextStore

TTL = 3600


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def static_dir() -> Path:
    return _static_dir


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(clock):
    return TextStore(ttl_seconds=TTL, shards=8, clock=clock)


@pytest.fixture()
def client(store):
    app = create_app(store=store)
    with TestClient(app) as c:
        yield c
