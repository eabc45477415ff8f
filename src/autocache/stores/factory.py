"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Factory helpers for selecting cache stores from settings.
"""

from __future__ import annotations

from typing import Any

from ..settings import AutoCacheSettings
from .base import CacheStore
from .inmemory import InMemoryCacheStore


def create_cache_store_from_env(
    settings: AutoCacheSettings | None = None,
    *,
    redis_client: Any | None = None,
) -> CacheStore:
    """
    Create a cache store from `AUTOCACHE_*` environment variables.

    Stores:
    - `inmemory` (default)
    - `cachetools`
    - `redis`

    Redis resolution:
    - Uses the provided `redis_client` when supplied.
    - Otherwise builds a client from `AUTOCACHE_REDIS_URL`, falling back to
      host/port/db/password variables.
    """
    settings = settings or AutoCacheSettings.from_env()
    store = settings.store

    if store in ("mem", "memory", "inmemory", "in_memory"):
        return InMemoryCacheStore(sweep_interval_s=settings.sweep_interval_s)

    if store in ("cachetools", "tlru"):
        from .tlru import TLRUCacheStore

        return TLRUCacheStore(maxsize=settings.max_size)

    if store in ("redis",):
        from .redis import RedisCacheStore

        client = redis_client
        if client is None:
            try:
                import redis.asyncio as redis
            except ModuleNotFoundError as exc:  # pragma: no cover
                raise RuntimeError(
                    "Redis cache store requires `redis` to be installed."
                ) from exc
            client = redis.Redis.from_url(settings.resolved_redis_url())

        return RedisCacheStore(client, prefix=settings.redis_prefix)

    raise ValueError(f"Unknown AUTOCACHE_STORE: {store}")
