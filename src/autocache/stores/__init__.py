"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache store contract, built-in stores and the env factory.
"""

from .base import CacheStore
from .factory import create_cache_store_from_env
from .inmemory import InMemoryCacheStore, StoreEntry
from .redis import RedisCacheStore
from .tlru import TLRUCacheStore

__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "StoreEntry",
    "TLRUCacheStore",
    "RedisCacheStore",
    "create_cache_store_from_env",
]
