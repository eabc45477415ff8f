"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: stores/redis.py.
"""

from __future__ import annotations

import logging
import pickle
from typing import Any

from ..errors import InvalidCacheClientError

logger = logging.getLogger("autocache.stores.redis")


class RedisCacheStore:
    """
    Redis-backed cache store for sharing entries between processes.

    Values are pickled. Requires a `redis.asyncio` client
    (``pip install autocache[redis]``).

    Args:
        redis_client: A ``redis.asyncio.Redis`` client instance.
        prefix: Key prefix for namespacing.
    """

    def __init__(self, redis_client: Any, *, prefix: str = "autocache:") -> None:
        if redis_client is None or not callable(getattr(redis_client, "get", None)):
            raise InvalidCacheClientError("Invalid redis client provided")
        self._redis = redis_client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> Any | None:
        blob = await self._redis.get(self._key(key))
        if blob is None:
            return None
        try:
            return pickle.loads(blob)
        except Exception:  # noqa: BLE001
            logger.warning("Dropping undecodable cache entry: %s", key)
            return None

    async def set(self, key: str, value: Any, ttl_s: int) -> None:
        if ttl_s < 0:
            return
        blob = pickle.dumps(value)
        if ttl_s > 0:
            await self._redis.setex(self._key(key), int(ttl_s), blob)
        else:
            await self._redis.set(self._key(key), blob)

    async def remove(self, key: str) -> None:
        await self._redis.delete(self._key(key))
