from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, List, Tuple

from app.services.codes import generate_code
from app.services.errors import InvalidCodeSyntax, InvalidInput, NotFound
from app.services.validation import is_valid_base64, is_valid_code

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60


@dataclass(frozen=True)
class Entry:
    text: str
    created_at: float


class _Shard:
    __slots__ = ("lock", "data")

    def __init__(self) -> None:
        self.lock = Lock()
        self.data: Dict[str, Entry] = {}


class TextStore:
    """In-memory, self-expiring text slots keyed by code.

    The map is lock-striped: each code hashes to one shard with its own lock,
    so unrelated codes rarely contend and no operation locks the whole map.
    Entries are immutable and replaced wholesale on update.

    Expiry is enforced on every ``get``/``update``; ``sweep`` only reclaims
    memory for slots nobody touches again.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        shards: int = 16,
        clock: Callable[[], float] = time.monotonic,
        code_factory: Callable[[], str] = generate_code,
    ) -> None:
        if shards < 1:
            raise ValueError("shards must be >= 1")
        self.ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._code_factory = code_factory
        self._shards: List[_Shard] = [_Shard() for _ in range(shards)]

    def _shard(self, code: str) -> _Shard:
        return self._shards[hash(code) % len(self._shards)]

    def _expired(self, entry: Entry, now: float) -> bool:
        return now - entry.created_at > self.ttl_seconds

    def _live_entry(self, shard: _Shard, code: str) -> Entry:
        # Caller holds shard.lock
        entry = shard.data.get(code)
        if entry is None:
            raise NotFound()
        if self._expired(entry, self._clock()):
            del shard.data[code]
            logger.debug("Expired on access: %s", code)
            raise NotFound()
        return entry

    def create(self) -> str:
        code = self._code_factory()
        entry = Entry(text="", created_at=self._clock())
        shard = self._shard(code)
        with shard.lock:
            # A colliding code silently replaces the older slot
            shard.data[code] = entry
        logger.debug("Created slot %s", code)
        return code

    def get(self, code: str) -> Entry:
        if not is_valid_code(code):
            raise InvalidCodeSyntax()
        shard = self._shard(code)
        with shard.lock:
            return self._live_entry(shard, code)

    def update(self, code: str, text: str | None) -> str:
        if not is_valid_code(code):
            raise InvalidCodeSyntax()

        error: InvalidInput | None = None
        if not text:
            error = InvalidInput()
        elif not is_valid_base64(text):
            error = InvalidInput("text must be valid base64")

        shard = self._shard(code)
        with shard.lock:
            current = self._live_entry(shard, code)
            if error is not None:
                raise error
            shard.data[code] = Entry(text=text, created_at=current.created_at)
        logger.debug("Updated slot %s (%d chars)", code, len(text))
        return code

    def sweep(self) -> int:
        """Evict every entry older than the TTL; return how many were removed."""
        removed = 0
        for shard in self._shards:
            with shard.lock:
                snapshot: List[Tuple[str, Entry]] = list(shard.data.items())

            now = self._clock()
            for code, entry in snapshot:
                if not self._expired(entry, now):
                    continue
                with shard.lock:
                    # Skip if the slot was re-created or updated since the snapshot
                    if shard.data.get(code) is entry:
                        del shard.data[code]
                        removed += 1
        return removed

    def clear(self) -> None:
        for shard in self._shards:
            with shard.lock:
                shard.data.clear()

    def __contains__(self, code: object) -> bool:
        # Raw presence, expiry not applied
        if not isinstance(code, str):
            return False
        shard = self._shard(code)
        with shard.lock:
            return code in shard.data

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.data)
        return total
