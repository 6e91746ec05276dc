from __future__ import annotations

import asyncio
import logging

import anyio

from app.services.store import TextStore

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """Background task that periodically evicts expired slots from a store."""

    def __init__(self, store: TextStore, *, interval_seconds: float = 300.0) -> None:
        self.store = store
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        try:
            removed = await anyio.to_thread.run_sync(self.store.sweep)
        except Exception:
            # Next tick will pick up whatever this one missed
            logger.exception("Expiry sweep failed")
            return 0
        if removed:
            logger.info("Swept %s expired slot(s), %s left", removed, len(self.store))
        return removed

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self.run_once()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="expiry-sweeper")
        logger.info("Expiry sweeper started (every %ss)", self.interval_seconds)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Expiry sweeper stopped")
