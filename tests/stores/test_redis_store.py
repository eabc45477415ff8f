from __future__ import annotations

import asyncio
import os
import pickle
from uuid import uuid4

import pytest

from autocache import InvalidCacheClientError, RedisCacheStore, Result


def run_async(coro):
    return asyncio.run(coro)


class _FakeRedis:
    def __init__(self) -> None:
        self.rows: dict[str, bytes] = {}
        self.calls: list[tuple] = []

    async def get(self, key):
        self.calls.append(("get", key))
        return self.rows.get(key)

    async def set(self, key, value):
        self.calls.append(("set", key))
        self.rows[key] = value

    async def setex(self, key, ttl, value):
        self.calls.append(("setex", key, ttl))
        self.rows[key] = value

    async def delete(self, key):
        self.calls.append(("delete", key))
        self.rows.pop(key, None)


def test_round_trip_uses_prefix_and_setex():
    async def scenario() -> None:
        redis = _FakeRedis()
        store = RedisCacheStore(redis, prefix="test:")

        await store.set("k", Result(value={"id": 1}), 30)

        assert redis.calls == [("setex", "test:k", 30)]
        assert await store.get("k") == Result(value={"id": 1})

    run_async(scenario())


def test_zero_ttl_uses_plain_set():
    async def scenario() -> None:
        redis = _FakeRedis()
        store = RedisCacheStore(redis)

        await store.set("k", Result(value=1), 0)

        assert redis.calls == [("set", "autocache:k")]

    run_async(scenario())


def test_negative_ttl_is_a_no_op():
    async def scenario() -> None:
        redis = _FakeRedis()
        store = RedisCacheStore(redis)

        await store.set("k", Result(value=1), -1)

        assert redis.calls == []

    run_async(scenario())


def test_cached_errors_survive_pickling():
    async def scenario() -> None:
        store = RedisCacheStore(_FakeRedis())
        await store.set("k", Result(error=ValueError("bad")), 30)

        cached = await store.get("k")
        assert isinstance(cached.error, ValueError)
        assert str(cached.error) == "bad"

    run_async(scenario())


def test_undecodable_entries_are_misses():
    async def scenario() -> None:
        redis = _FakeRedis()
        redis.rows["autocache:k"] = b"not a pickle"
        store = RedisCacheStore(redis)

        assert await store.get("k") is None

    run_async(scenario())


def test_remove_deletes_prefixed_key():
    async def scenario() -> None:
        redis = _FakeRedis()
        redis.rows["autocache:k"] = pickle.dumps(Result(value=1))
        store = RedisCacheStore(redis)

        await store.remove("k")
        await store.remove("k")

        assert redis.rows == {}

    run_async(scenario())


def test_rejects_invalid_client():
    with pytest.raises(InvalidCacheClientError):
        RedisCacheStore(None)
    with pytest.raises(InvalidCacheClientError):
        RedisCacheStore(object())


def _redis_url() -> str | None:
    return os.getenv("AUTOCACHE_TEST_REDIS_URL")


@pytest.mark.skipif(
    _redis_url() is None, reason="AUTOCACHE_TEST_REDIS_URL is not set"
)
def test_redis_integration_round_trip():
    async def scenario() -> None:
        import redis.asyncio as redis

        client = redis.Redis.from_url(_redis_url())
        store = RedisCacheStore(client, prefix=f"autocache-test-{uuid4().hex}:")
        try:
            await store.set("k", Result(value="v"), 30)
            assert await store.get("k") == Result(value="v")
            await store.remove("k")
            assert await store.get("k") is None
        finally:
            await client.aclose()

    run_async(scenario())
