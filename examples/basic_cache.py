"""
basic_cache.py — Minimal autocache example.

Wraps a small async client so `get_user` results are cached for a minute and
concurrent identical lookups hit the upstream only once.

Usage:
    python examples/basic_cache.py
"""

import asyncio

from autocache import InMemoryCacheStore, with_auto_cache


class UserClient:
    def __init__(self) -> None:
        self.requests = 0

    async def get_user(self, user_id: int) -> dict[str, object]:
        self.requests += 1
        await asyncio.sleep(0.1)
        return {"id": user_id, "name": f"user-{user_id}"}


async def main() -> None:
    client = UserClient()
    async with InMemoryCacheStore() as store:
        users = with_auto_cache(client, store, {"get_user": {"ttl": 60}})

        first = await asyncio.gather(*(users.get_user(1) for _ in range(10)))
        again = await users.get_user(1)

    print(first[0], again)
    print(f"upstream requests: {client.requests}")


if __name__ == "__main__":
    asyncio.run(main())
