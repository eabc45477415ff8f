"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: inflight.py.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


class InFlightCalls:
    """
    Deduplicate identical in-flight upstream calls by cache key.

    The entry for a key is inserted with no suspension point between the
    "not in flight" check and task creation, and is removed as soon as the
    task settles, whatever its outcome.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task[Any]] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    async def run(
        self,
        key: str,
        factory: Callable[[], Coroutine[Any, Any, T]],
    ) -> T:
        existing = self._tasks.get(key)
        if existing is not None:
            # Followers must not cancel the shared call when they are cancelled.
            return await asyncio.shield(existing)

        task: asyncio.Task[T] = asyncio.create_task(factory())
        self._tasks[key] = task
        task.add_done_callback(lambda done: self._release(key, done))
        return await task

    def _release(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]
