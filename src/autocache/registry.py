"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: registry.py.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from .errors import MethodNotConfiguredError
from .options import MethodOptionsInput, normalize_method_options
from .result_cache import KeyBuilder, ResultCache
from .stores.base import CacheStore
from .ttl import FixedTTL, TTLPolicy, ValidatedTTL, ttl_policy, validate_ttl

T = TypeVar("T")

KEY_DELIMITER = ":"


def default_key_builder(type_name: str, method: str) -> KeyBuilder:
    """
    Build `"{type_name}:{method}:{arg1}:{arg2}..."` keys from call arguments.

    Calls with keyword arguments use a call-style key instead,
    `"{type_name}:{method}(arg1, name=value)"`, rendering every argument
    with `repr` and keywords sorted by name. A method name is never followed
    by `(` in a positional key, so the two forms cannot collide.
    """

    def _build_key(*args: Any, **kwargs: Any) -> str:
        if kwargs:
            rendered = [repr(arg) for arg in args]
            rendered.extend(f"{name}={kwargs[name]!r}" for name in sorted(kwargs))
            return f"{type_name}{KEY_DELIMITER}{method}({', '.join(rendered)})"
        parts = KEY_DELIMITER.join(str(arg) for arg in args)
        return KEY_DELIMITER.join([type_name, method, parts])

    return _build_key


class AutoCache(Generic[T]):
    """
    Registry of per-method result caches for one target object.

    Built once from the method configuration; methods cannot be added later.
    Methods configured without a TTL are not registered here.
    """

    def __init__(
        self,
        target: T,
        store: CacheStore,
        methods: Mapping[str, MethodOptionsInput],
    ) -> None:
        self._target = target
        self._store = store
        self.methods: dict[str, ResultCache[Any]] = {}

        type_name = type(target).__name__
        for method, options in normalize_method_options(methods).items():
            if not options.caches:
                continue
            policy = self._validated_policy(
                method,
                ttl_policy(options.ttl),
                options.allow_infinite_caching,
            )
            self.methods[method] = ResultCache(
                store,
                build_key=options.build_key or default_key_builder(type_name, method),
                ttl=policy,
            )

    @property
    def target(self) -> T:
        return self._target

    @property
    def store(self) -> CacheStore:
        return self._store

    def for_method(self, method: str) -> ResultCache[Any]:
        """Return the result cache registered for `method`."""
        cache = self.methods.get(method)
        if cache is None:
            raise MethodNotConfiguredError(method)
        return cache

    def configured_methods(self) -> list[str]:
        return sorted(self.methods)

    async def invalidate(self, method: str, *args: Any, **kwargs: Any) -> None:
        """Drop the cached result of `method` called with these arguments."""
        await self.for_method(method).remove(*args, **kwargs)

    @staticmethod
    def _validated_policy(
        method: str,
        policy: TTLPolicy,
        allow_infinite_caching: bool,
    ) -> TTLPolicy:
        # Fixed TTLs are checked once here; computed ones on every evaluation.
        if isinstance(policy, FixedTTL):
            validate_ttl(policy.seconds, allow_infinite_caching, method=method)
            return policy
        return ValidatedTTL(
            policy,
            allow_infinite_caching=allow_infinite_caching,
            method=method,
        )
