"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Transparent per-method result caching for async objects.
"""

from .errors import (
    AutoCacheConfigError,
    AutoCacheError,
    InfiniteCachingNotAllowedError,
    InvalidCacheClientError,
    MethodNotConfiguredError,
)
from .inflight import InFlightCalls
from .options import MethodCacheOptions
from .proxy import AutoCachedObject, with_auto_cache
from .registry import AutoCache, default_key_builder
from .result_cache import ResultCache
from .settings import AutoCacheSettings
from .stores import (
    CacheStore,
    InMemoryCacheStore,
    RedisCacheStore,
    TLRUCacheStore,
    create_cache_store_from_env,
)
from .ttl import (
    ComputedTTL,
    FixedTTL,
    TTLPolicy,
    ValidatedTTL,
    success_or_404_error,
    ttl_policy,
    validate_ttl,
)
from .types import CachedResult, Result

__all__ = [
    "with_auto_cache",
    "AutoCachedObject",
    "AutoCache",
    "ResultCache",
    "MethodCacheOptions",
    "InFlightCalls",
    "Result",
    "CachedResult",
    "TTLPolicy",
    "FixedTTL",
    "ComputedTTL",
    "ValidatedTTL",
    "ttl_policy",
    "validate_ttl",
    "success_or_404_error",
    "default_key_builder",
    "CacheStore",
    "InMemoryCacheStore",
    "TLRUCacheStore",
    "RedisCacheStore",
    "create_cache_store_from_env",
    "AutoCacheSettings",
    "AutoCacheError",
    "AutoCacheConfigError",
    "InfiniteCachingNotAllowedError",
    "MethodNotConfiguredError",
    "InvalidCacheClientError",
]
