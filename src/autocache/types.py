"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: types.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class Result(Generic[V]):
    """
    Outcome of one upstream call, as stored in the cache.

    Holds either a success `value` or the raised `error`. An instance with
    neither set is legal and means the call produced nothing worth replaying.
    """

    value: V | None = None
    error: BaseException | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> V | None:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            # Drop the previous traceback so replays do not grow it.
            raise self.error.with_traceback(None)
        return self.value


@dataclass(frozen=True, slots=True)
class CachedResult(Result[V]):
    """Result passed to post-call hooks, tagged with its origin."""

    cached: bool = False

    @classmethod
    def of(cls, result: Result[Any], *, cached: bool) -> "CachedResult[Any]":
        return cls(value=result.value, error=result.error, cached=cached)
