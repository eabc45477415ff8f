"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Caching proxy that wraps configured methods of a target object.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from .inflight import InFlightCalls
from .options import MethodCacheOptions, MethodOptionsInput, normalize_method_options
from .registry import AutoCache
from .result_cache import ResultCache
from .stores.base import CacheStore
from .types import CachedResult, Result

T = TypeVar("T")

_STATE = "_AutoCachedObject__methods"


class _CachedMethods(Generic[T]):
    """
    Per-target method wrappers.

    Kept apart from `AutoCachedObject` so its helpers never shadow
    attributes of the target.
    """

    def __init__(
        self,
        target: T,
        auto_cache: AutoCache[T],
        methods: Mapping[str, MethodCacheOptions],
    ) -> None:
        self.target = target
        self.auto_cache = auto_cache
        self._inflight = InFlightCalls()
        self.wrappers: dict[str, Callable[..., Any]] = {
            name: self._wrap(name, options) for name, options in methods.items()
        }

    def _wrap(
        self,
        method: str,
        options: MethodCacheOptions,
    ) -> Callable[..., Any]:
        result_cache = self.auto_cache.methods.get(method)
        if result_cache is None:
            wrapper = self._uncached_wrapper(method, options)
        else:
            wrapper = self._cached_wrapper(method, options, result_cache)
        wrapper.__name__ = method
        wrapper.__qualname__ = f"{type(self.target).__name__}.{method}"
        return wrapper

    async def _call_original(
        self,
        method: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        # Resolved on each call so methods replaced on the target are honoured.
        value = getattr(self.target, method)(*args, **kwargs)
        if inspect.isawaitable(value):
            value = await value
        return value

    async def _after(
        self,
        options: MethodCacheOptions,
        result: CachedResult[Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        if options.after is None:
            return
        outcome = options.after(self.auto_cache, result, *args, **kwargs)
        if inspect.isawaitable(outcome):
            await outcome

    def _uncached_wrapper(
        self,
        method: str,
        options: MethodCacheOptions,
    ) -> Callable[..., Any]:
        async def call(*args: Any, **kwargs: Any) -> Any:
            value = await self._call_original(method, args, kwargs)
            await self._after(
                options, CachedResult(value=value, cached=False), args, kwargs
            )
            return value

        return call

    def _cached_wrapper(
        self,
        method: str,
        options: MethodCacheOptions,
        result_cache: ResultCache[Any],
    ) -> Callable[..., Any]:
        async def load(
            key: str,
            args: tuple[Any, ...],
            kwargs: dict[str, Any],
        ) -> Any:
            try:
                value = await self._call_original(method, args, kwargs)
            except Exception as error:
                failure: Result[Any] = Result(error=error)
                await result_cache.store_result(key, failure)
                await self._after(
                    options, CachedResult.of(failure, cached=False), args, kwargs
                )
                raise

            success: Result[Any] = Result(value=value)
            await result_cache.store_result(key, success)
            await self._after(
                options, CachedResult.of(success, cached=False), args, kwargs
            )
            return value

        async def call(*args: Any, **kwargs: Any) -> Any:
            key = result_cache.build_key(*args, **kwargs)

            cached = await result_cache.lookup(key)
            if cached is not None:
                await self._after(
                    options, CachedResult.of(cached, cached=True), args, kwargs
                )
                return cached.unwrap()

            return await self._inflight.run(key, lambda: load(key, args, kwargs))

        return call


class AutoCachedObject(Generic[T]):
    """
    Transparent wrapper around `target`.

    Configured methods go through cache lookup, in-flight coalescing and
    result storage. Every other attribute is read from, and written to, the
    target itself. Besides `no_cache` and `auto_cache` the wrapper defines
    no public or private names of its own.
    """

    def __init__(
        self,
        target: T,
        auto_cache: AutoCache[T],
        methods: Mapping[str, MethodCacheOptions],
    ) -> None:
        object.__setattr__(self, _STATE, _CachedMethods(target, auto_cache, methods))

    @property
    def no_cache(self) -> T:
        """The original, unwrapped object."""
        return self.__methods.target

    @property
    def auto_cache(self) -> AutoCache[T]:
        """Registry of per-method caches, for manual invalidation."""
        return self.__methods.auto_cache

    def __getattr__(self, name: str) -> Any:
        try:
            methods = self.__dict__[_STATE]
        except KeyError:
            raise AttributeError(name) from None

        original = getattr(methods.target, name)
        wrapper = methods.wrappers.get(name)
        if wrapper is not None and callable(original):
            return wrapper
        return original

    def __setattr__(self, name: str, value: Any) -> None:
        if name == _STATE:
            raise AttributeError(f"{name} is read-only")
        setattr(self.__methods.target, name, value)

    def __delattr__(self, name: str) -> None:
        delattr(self.__methods.target, name)

    def __dir__(self) -> list[str]:
        return sorted(set(dir(self.__methods.target)) | {"no_cache", "auto_cache"})

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.__methods.target!r})"


def with_auto_cache(
    target: T,
    store: CacheStore,
    methods: Mapping[str, MethodOptionsInput],
) -> AutoCachedObject[T]:
    """
    Wrap `target` so the methods named in `methods` cache their results.

    Methods configured with a `ttl` are cached in `store`; methods configured
    with only an `after` hook are wrapped without caching. Everything else
    passes straight through to `target`.
    """
    options = normalize_method_options(methods)
    auto_cache = AutoCache(target, store, options)
    return AutoCachedObject(target, auto_cache, options)
