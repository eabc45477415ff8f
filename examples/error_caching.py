"""
error_caching.py — Caching "not found" errors alongside successes.

`success_or_404_error` keeps successes and 404 errors for the given TTL and
never caches other failures, so transient errors are retried upstream.
The `after` hook on `rename_item` drops the stale `get_item` entry.

Usage:
    python examples/error_caching.py
"""

import asyncio

from autocache import TLRUCacheStore, success_or_404_error, with_auto_cache


class NotFoundError(Exception):
    status = 404


class ItemClient:
    def __init__(self) -> None:
        self.items = {1: "lamp"}
        self.requests = 0

    async def get_item(self, item_id: int) -> str:
        self.requests += 1
        if item_id not in self.items:
            raise NotFoundError(f"item {item_id} not found")
        return self.items[item_id]

    async def rename_item(self, item_id: int, name: str) -> None:
        self.items[item_id] = name


async def invalidate_item(auto_cache, result, item_id, name):
    _ = result
    _ = name
    await auto_cache.invalidate("get_item", item_id)


async def main() -> None:
    client = ItemClient()
    items = with_auto_cache(
        client,
        TLRUCacheStore(maxsize=1000),
        {
            "get_item": {"ttl": success_or_404_error(300)},
            "rename_item": {"after": invalidate_item},
        },
    )

    for _ in range(3):
        try:
            await items.get_item(2)
        except NotFoundError as error:
            print(f"lookup failed: {error}")

    print(await items.get_item(1))
    await items.rename_item(1, "desk lamp")
    print(await items.get_item(1))
    print(f"upstream requests: {client.requests}")


if __name__ == "__main__":
    asyncio.run(main())
