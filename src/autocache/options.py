"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Per-method caching options accepted by `AutoCache` and `with_auto_cache`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt

from .types import Result


class MethodCacheOptions(BaseModel):
    """
    Caching configuration for one method.

    Fields
    - ttl: seconds to keep a result, or a callable computing it from the
      `Result`. `None` leaves the method uncached (only `after` applies).
    - build_key: custom cache key builder called with the method arguments.
    - allow_infinite_caching: permits a TTL of zero (never expires).
    - after: hook called as `after(auto_cache, result, *args, **kwargs)`
      once per call, with a `CachedResult`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    ttl: StrictInt | Callable[[Result[Any]], int] | None = None
    build_key: Callable[..., str] | None = None
    allow_infinite_caching: StrictBool = False
    after: Callable[..., Any] | None = None

    @property
    def caches(self) -> bool:
        return self.ttl is not None


MethodOptionsInput = MethodCacheOptions | Mapping[str, Any]


def normalize_method_options(
    methods: Mapping[str, MethodOptionsInput] | None,
) -> dict[str, MethodCacheOptions]:
    """Validate a method-name -> options mapping into `MethodCacheOptions`."""
    normalized: dict[str, MethodCacheOptions] = {}
    for name, options in (methods or {}).items():
        method = name.strip()
        if not method:
            raise ValueError("method names must be non-empty")
        if isinstance(options, MethodCacheOptions):
            normalized[method] = options
        else:
            normalized[method] = MethodCacheOptions.model_validate(options)
    return normalized
