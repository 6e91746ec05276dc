from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, settings
from app.core.logging_config import configure_logging
from app.routers import frontend, hello, texts
from app.services.errors import GeneratorFailure, TextRelayError
from app.services.store import TextStore
from app.services.sweeper import ExpirySweeper

configure_logging(log_dir=settings.log_dir, level=settings.log_level)
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(config: Settings | None = None, *, store: TextStore | None = None) -> FastAPI:
    if config is None:
        config = settings
    if store is None:
        store = TextStore(ttl_seconds=config.text_ttl_seconds, shards=config.store_shards)
    sweeper = ExpirySweeper(store, interval_seconds=config.sweep_interval_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper.start()
        logger.info("Serving frontend from %s", config.static_dir)
        try:
            yield
        finally:
            await sweeper.stop()

    app = FastAPI(title="textrelay", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.state.sweeper = sweeper
    app.state.static_dir = config.static_dir

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error")
            return _error(500, "internal server error")
        duration_ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration_ms)
        return response

    @app.exception_handler(TextRelayError)
    async def text_relay_error(request: Request, exc: TextRelayError) -> JSONResponse:
        if isinstance(exc, GeneratorFailure):
            logger.critical("Secure random source unavailable, refusing to mint codes", exc_info=exc)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, "invalid json")

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    app.include_router(hello.router)
    app.include_router(texts.router)
    # Catch-all, must stay last
    app.include_router(frontend.router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    logger.info("Server starting on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
