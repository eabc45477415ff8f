"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: stores/inmemory.py.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger("autocache.stores.inmemory")


@dataclass(frozen=True, slots=True)
class StoreEntry:
    """One cached value with its absolute expiry on the store clock."""

    value: Any
    expires_at_s: float

    def expired(self, now: float) -> bool:
        return self.expires_at_s < now


class InMemoryCacheStore:
    """
    Process-local cache store with lazy expiry and a periodic sweep.

    Values are deep-copied on write and on read, so callers never share
    a cached object. Expired entries are dropped when read, and in bulk by
    the background sweep started with `start()` (or `async with store:`).
    """

    def __init__(
        self,
        *,
        sweep_interval_s: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if sweep_interval_s <= 0:
            raise ValueError("sweep_interval_s must be > 0")
        self._rows: dict[str, StoreEntry] = {}
        self._sweep_interval_s = sweep_interval_s
        self._clock = clock
        self._sweep_task: asyncio.Task[None] | None = None

    def __len__(self) -> int:
        return len(self._rows)

    async def get(self, key: str) -> Any | None:
        row = self._rows.get(key)
        if row is None:
            return None
        if row.expired(self._clock()):
            self._rows.pop(key, None)
            return None
        return copy.deepcopy(row.value)

    async def set(self, key: str, value: Any, ttl_s: int) -> None:
        if ttl_s < 0:
            return
        expires_at_s = math.inf if ttl_s == 0 else self._clock() + ttl_s
        self._rows[key] = StoreEntry(
            value=copy.deepcopy(value), expires_at_s=expires_at_s
        )

    async def remove(self, key: str) -> None:
        self._rows.pop(key, None)

    def sweep(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        expired = [key for key, row in self._rows.items() if row.expired(now)]
        for key in expired:
            del self._rows[key]
        return len(expired)

    @property
    def is_sweeping(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    async def start(self) -> None:
        """Start the background sweep. Calling it again is a no-op."""
        if self.is_sweeping:
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop())
        logger.info(
            "InMemoryCacheStore sweep started (interval=%.1fs)",
            self._sweep_interval_s,
        )

    async def stop(self) -> None:
        """Stop the background sweep, if running."""
        task = self._sweep_task
        self._sweep_task = None
        if task is None:
            return
        if not task.done():
            task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        logger.info("InMemoryCacheStore sweep stopped")

    async def __aenter__(self) -> "InMemoryCacheStore":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._sweep_interval_s)
            try:
                removed = self.sweep()
            except Exception:
                logger.exception("InMemoryCacheStore sweep failed")
                continue
            if removed:
                logger.debug("InMemoryCacheStore swept %d expired entries", removed)
