"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache store adapter over `cachetools.TLRUCache`.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from typing import Any

from cachetools import TLRUCache

from ..errors import InvalidCacheClientError


@dataclass(frozen=True, slots=True)
class _TTLEntry:
    value: Any
    ttl_s: int


class TLRUCacheStore:
    """
    Store backed by a size-bounded `cachetools.TLRUCache`.

    Each entry carries its own TTL; zero never expires. Values are
    deep-copied on write and on read, like `InMemoryCacheStore`. A caller-supplied
    cache must be built with `ttu=TLRUCacheStore.ttu`. Eviction of live
    entries once `maxsize` is reached is left to cachetools (LRU).
    """

    def __init__(
        self,
        cache: TLRUCache | None = None,
        *,
        maxsize: int = 10_000,
    ) -> None:
        if cache is None:
            cache = TLRUCache(maxsize=maxsize, ttu=self.ttu)
        elif not isinstance(cache, TLRUCache):
            raise InvalidCacheClientError(
                f"Invalid TLRUCache instance provided: {type(cache).__name__}"
            )
        self._cache = cache

    @staticmethod
    def ttu(key: str, entry: _TTLEntry, now: float) -> float:
        """Time-to-use function honouring per-entry TTLs."""
        _ = key
        if entry.ttl_s == 0:
            return math.inf
        return now + entry.ttl_s

    def __len__(self) -> int:
        return len(self._cache)

    async def get(self, key: str) -> Any | None:
        entry = self._cache.get(key)
        if entry is None:
            return None
        return copy.deepcopy(entry.value)

    async def set(self, key: str, value: Any, ttl_s: int) -> None:
        if ttl_s < 0:
            return
        self._cache[key] = _TTLEntry(value=copy.deepcopy(value), ttl_s=ttl_s)

    async def remove(self, key: str) -> None:
        self._cache.pop(key, None)
