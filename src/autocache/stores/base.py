"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: stores/base.py.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """
    Key-value contract every cache backend implements.

    `ttl_s` follows the TTL rules of `autocache.ttl`: positive expires after
    that many seconds, zero never expires, negative must not be stored.
    """

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl_s: int) -> None: ...

    async def remove(self, key: str) -> None: ...
