from __future__ import annotations

import asyncio
import json
import logging

import pytest

from autocache import FixedTTL, InMemoryCacheStore, Result, ResultCache


def run_async(coro):
    return asyncio.run(coro)


class _RecordingStore:
    def __init__(self, rows=None):
        self.rows = dict(rows or {})
        self.get_calls: list[str] = []
        self.set_calls: list[tuple[str, object, int]] = []
        self.remove_calls: list[str] = []

    async def get(self, key):
        self.get_calls.append(key)
        return self.rows.get(key)

    async def set(self, key, value, ttl_s):
        self.set_calls.append((key, value, ttl_s))
        self.rows[key] = value

    async def remove(self, key):
        self.remove_calls.append(key)
        self.rows.pop(key, None)


def _json_key(*args, **kwargs):
    return json.dumps([args, kwargs])


def test_build_key_delegates_to_key_builder():
    seen = []

    def build_key(*args, **kwargs):
        seen.append((args, kwargs))
        return "k"

    cache = ResultCache(_RecordingStore(), build_key=build_key, ttl=60)

    assert cache.build_key(1, 2, x=3) == "k"
    assert seen == [((1, 2), {"x": 3})]


def test_get_returns_stored_result():
    store = _RecordingStore({_json_key(1, 2, 3): Result(value="test")})
    cache = ResultCache(store, build_key=_json_key, ttl=60)

    result = run_async(cache.get(1, 2, 3))

    assert result == Result(value="test")
    assert store.get_calls == [_json_key(1, 2, 3)]


def test_get_miss_returns_none():
    cache = ResultCache(_RecordingStore(), build_key=_json_key, ttl=60)
    assert run_async(cache.get("missing")) is None


def test_set_writes_result_with_fixed_ttl():
    store = _RecordingStore()
    cache = ResultCache(store, build_key=_json_key, ttl=60)
    result = Result(value="test")

    run_async(cache.set(result, 1, 2, 3))

    assert store.set_calls == [(_json_key(1, 2, 3), result, 60)]


def test_set_skips_store_when_ttl_negative():
    store = _RecordingStore()
    cache = ResultCache(store, build_key=_json_key, ttl=lambda result: -1)

    run_async(cache.set(Result(value="test"), 1))

    assert store.set_calls == []


def test_fixed_ttl_does_not_cache_errors():
    store = _RecordingStore()
    cache = ResultCache(store, build_key=_json_key, ttl=60)

    run_async(cache.set(Result(error=RuntimeError("boom")), 1))

    assert store.set_calls == []
    assert FixedTTL(60).resolve(Result(error=RuntimeError("boom"))) == -1


def test_computed_ttl_sees_the_result():
    store = _RecordingStore()
    error = LookupError("missing")
    cache = ResultCache(
        store,
        build_key=_json_key,
        ttl=lambda result: 999 if result.error else result.value * 2,
    )

    run_async(cache.set(Result(value=21), "a"))
    run_async(cache.set(Result(error=error), "b"))

    assert store.set_calls == [
        (_json_key("a"), Result(value=21), 42),
        (_json_key("b"), Result(error=error), 999),
    ]


def test_zero_ttl_is_written():
    store = _RecordingStore()
    cache = ResultCache(store, build_key=_json_key, ttl=0)

    run_async(cache.set(Result(value="forever"), 1))

    assert store.set_calls == [(_json_key(1), Result(value="forever"), 0)]


def test_remove_deletes_key_and_is_idempotent():
    store = _RecordingStore({_json_key(1): Result(value="x")})
    cache = ResultCache(store, build_key=_json_key, ttl=60)

    run_async(cache.remove(1))
    run_async(cache.remove(1))

    assert store.remove_calls == [_json_key(1), _json_key(1)]
    assert store.rows == {}


def test_round_trip_through_in_memory_store():
    async def scenario() -> None:
        cache = ResultCache(InMemoryCacheStore(), build_key=_json_key, ttl=60)
        error = ValueError("bad input")
        errors = ResultCache(
            InMemoryCacheStore(),
            build_key=_json_key,
            ttl=lambda result: 30,
        )

        await cache.set(Result(value={"id": 1}), "x")
        await errors.set(Result(error=error), "x")

        assert await cache.get("x") == Result(value={"id": 1})
        replayed = await errors.get("x")
        assert isinstance(replayed.error, ValueError)
        assert replayed.error.args == error.args

    run_async(scenario())


def test_key_addressed_operations_match_argument_ones():
    async def scenario() -> None:
        store = _RecordingStore()
        cache = ResultCache(store, build_key=_json_key, ttl=5)
        key = cache.build_key("a", page=2)

        await cache.store_result(key, Result(value=1))
        assert await cache.get("a", page=2) == Result(value=1)

        await cache.invalidate(key)
        assert await cache.lookup(key) is None

    run_async(scenario())


def test_store_errors_propagate():
    class _BrokenStore(_RecordingStore):
        async def get(self, key):
            raise ConnectionError("store down")

    cache = ResultCache(_BrokenStore(), build_key=_json_key, ttl=5)

    with pytest.raises(ConnectionError, match="store down"):
        run_async(cache.get(1))


def test_audit_lines_are_logged(caplog):
    cache = ResultCache(_RecordingStore(), build_key=_json_key, ttl=5)

    with caplog.at_level(logging.DEBUG, logger="autocache.result_cache"):
        run_async(cache.get("a"))
        run_async(cache.set(Result(value="x" * 2000), "a"))
        run_async(cache.get("a"))
        run_async(cache.remove("a"))

    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Key miss:") for message in messages)
    assert any(message.startswith("Key set:") for message in messages)
    assert any(message.startswith("Key hit:") for message in messages)
    assert any(message.startswith("Key removed:") for message in messages)
    assert all(len(message) < 700 for message in messages)
