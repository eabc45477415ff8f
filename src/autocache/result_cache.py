"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Per-method result cache: key building, TTL resolution and store access.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .stores.base import CacheStore
from .ttl import TTLPolicy, TTLValue, ttl_policy
from .types import Result

logger = logging.getLogger("autocache.result_cache")

V = TypeVar("V")

KeyBuilder = Callable[..., str]

_MAX_LOGGED_CHARS = 512


class ResultCache(Generic[V]):
    """
    Caches the results of one method.

    The store only ever holds `Result` objects, so failures can be cached
    and replayed exactly like successes.
    """

    def __init__(
        self,
        store: CacheStore,
        *,
        build_key: KeyBuilder,
        ttl: TTLValue | TTLPolicy,
    ) -> None:
        self._store = store
        self._build_key = build_key
        self._ttl = ttl_policy(ttl)

    @property
    def ttl(self) -> TTLPolicy:
        return self._ttl

    def build_key(self, *args: Any, **kwargs: Any) -> str:
        return self._build_key(*args, **kwargs)

    async def get(self, *args: Any, **kwargs: Any) -> Result[V] | None:
        return await self.lookup(self.build_key(*args, **kwargs))

    async def set(self, result: Result[V], *args: Any, **kwargs: Any) -> None:
        ttl = self._ttl.resolve(result)
        if ttl < 0:
            return
        await self._write(self.build_key(*args, **kwargs), result, ttl)

    async def remove(self, *args: Any, **kwargs: Any) -> None:
        await self.invalidate(self.build_key(*args, **kwargs))

    async def lookup(self, key: str) -> Result[V] | None:
        """Read one entry by its already-built key."""
        result = await self._store.get(key)
        if result is None:
            logger.debug("Key miss: %s", key)
            return None
        logger.debug("Key hit: %s result=%s", key, _truncate(result))
        return result

    async def store_result(self, key: str, result: Result[V]) -> None:
        """Write `result` under an already-built key, honouring the TTL policy."""
        ttl = self._ttl.resolve(result)
        if ttl < 0:
            logger.debug("Key skipped: %s ttl=%d", key, ttl)
            return
        await self._write(key, result, ttl)

    async def invalidate(self, key: str) -> None:
        await self._store.remove(key)
        logger.debug("Key removed: %s", key)

    async def _write(self, key: str, result: Result[V], ttl: int) -> None:
        await self._store.set(key, result, ttl)
        logger.debug("Key set: %s ttl=%d result=%s", key, ttl, _truncate(result))


class _truncate:
    """Lazily rendered, length-capped repr for log lines."""

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        self._value = value

    def __str__(self) -> str:
        text = repr(self._value)
        if len(text) <= _MAX_LOGGED_CHARS:
            return text
        return text[:_MAX_LOGGED_CHARS] + "(truncated)"
