"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

TTL policies for cached results.

A TTL is resolved once per store attempt:

- positive: the entry expires after that many seconds
- zero: the entry never expires (needs `allow_infinite_caching`)
- negative: the entry is not stored at all
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .errors import InfiniteCachingNotAllowedError
from .types import Result

TTLFunction = Callable[[Result[Any]], int]
TTLValue = int | TTLFunction

DO_NOT_CACHE = -1


@runtime_checkable
class TTLPolicy(Protocol):
    """Anything that can turn a result into a TTL in seconds."""

    def resolve(self, result: Result[Any]) -> int: ...


@dataclass(frozen=True, slots=True)
class FixedTTL:
    """Constant TTL applied to successful results only."""

    seconds: int

    def resolve(self, result: Result[Any]) -> int:
        if result.is_error:
            return DO_NOT_CACHE
        return self.seconds


@dataclass(frozen=True, slots=True)
class ComputedTTL:
    """TTL computed from each result, errors included."""

    compute: TTLFunction

    def resolve(self, result: Result[Any]) -> int:
        ttl = self.compute(result)
        if isinstance(ttl, bool) or not isinstance(ttl, int):
            raise TypeError(
                f"computed ttl must be an int, got {type(ttl).__name__}: {ttl!r}"
            )
        return ttl


@dataclass(frozen=True, slots=True)
class ValidatedTTL:
    """Wraps a policy and validates every TTL it produces."""

    policy: TTLPolicy
    allow_infinite_caching: bool = False
    method: str | None = None

    def resolve(self, result: Result[Any]) -> int:
        ttl = self.policy.resolve(result)
        validate_ttl(ttl, self.allow_infinite_caching, method=self.method)
        return ttl


def validate_ttl(
    ttl: int,
    allow_infinite_caching: bool = False,
    *,
    method: str | None = None,
) -> None:
    """Reject a zero TTL unless infinite caching was opted into."""
    if ttl == 0 and not allow_infinite_caching:
        raise InfiniteCachingNotAllowedError(method)


def ttl_policy(ttl: TTLValue | TTLPolicy) -> TTLPolicy:
    """Normalise an int, callable or policy into a `TTLPolicy`."""
    if isinstance(ttl, bool):
        raise TypeError("ttl must be an int or a callable, not bool")
    if isinstance(ttl, int):
        return FixedTTL(ttl)
    if isinstance(ttl, TTLPolicy):
        return ttl
    if callable(ttl):
        return ComputedTTL(ttl)
    raise TypeError(f"ttl must be an int or a callable, got {type(ttl).__name__}")


def _status_of(error: BaseException | None) -> Any:
    if error is None:
        return None
    status = getattr(error, "status", None)
    if status is None:
        status = getattr(error, "status_code", None)
    return status


def success_or_404_error(ttl: int) -> TTLFunction:
    """
    Cache successes and "not found" errors for `ttl` seconds.

    Any other error is not cached. Errors are matched on a `status` or
    `status_code` attribute equal to 404.
    """

    def _resolve(result: Result[Any]) -> int:
        if result.error is None and result.value is not None:
            return ttl
        if _status_of(result.error) == 404:
            return ttl
        return DO_NOT_CACHE

    return _resolve
