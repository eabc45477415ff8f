#!/usr/bin/env python3
"""
Cache benchmark utility for coalescing and hit-rate characterization.

Usage examples:
  PYTHONPATH=src python scripts/cache_benchmark.py --store inmemory
  PYTHONPATH=src python scripts/cache_benchmark.py --store redis --redis-url redis://localhost:6379/0
"""

from __future__ import annotations

import argparse
import asyncio
import statistics
import time
import uuid

from autocache import (
    CacheStore,
    InMemoryCacheStore,
    RedisCacheStore,
    TLRUCacheStore,
    with_auto_cache,
)


class SlowRepository:
    """Upstream that sleeps to simulate network latency."""

    def __init__(self, latency_ms: float) -> None:
        self._latency_s = latency_ms / 1000.0
        self.upstream_calls = 0

    async def fetch(self, item_id: int) -> dict[str, int]:
        self.upstream_calls += 1
        await asyncio.sleep(self._latency_s)
        return {"id": item_id}


def build_store(store: str, redis_url: str | None) -> CacheStore:
    if store == "inmemory":
        return InMemoryCacheStore()
    if store == "cachetools":
        return TLRUCacheStore()
    if store == "redis":
        if not redis_url:
            raise ValueError("--redis-url is required for redis store")
        import redis.asyncio as redis

        client = redis.Redis.from_url(redis_url)
        return RedisCacheStore(client, prefix=f"bench:{uuid.uuid4().hex}:")
    raise ValueError(f"Unsupported store: {store}")


async def run_benchmark(
    *,
    store: str,
    num_calls: int,
    distinct_keys: int,
    latency_ms: float,
    redis_url: str | None,
) -> None:
    repository = SlowRepository(latency_ms=latency_ms)
    cached = with_auto_cache(
        repository,
        build_store(store, redis_url),
        {"fetch": {"ttl": 60}},
    )

    latencies: list[float] = []

    async def one_call(index: int) -> None:
        started = time.perf_counter()
        await cached.fetch(index % distinct_keys)
        latencies.append(time.perf_counter() - started)

    started = time.perf_counter()
    await asyncio.gather(*(one_call(i) for i in range(num_calls)))
    elapsed = time.perf_counter() - started

    p50 = statistics.median(latencies) if latencies else 0.0
    p95 = sorted(latencies)[int(0.95 * (len(latencies) - 1))] if latencies else 0.0

    print(f"store={store}")
    print(f"calls={num_calls}")
    print(f"distinct_keys={distinct_keys}")
    print(f"upstream_latency_ms={latency_ms:.2f}")
    print(f"upstream_calls={repository.upstream_calls}")
    print(f"elapsed_s={elapsed:.3f}")
    print(f"call_p50_ms={p50 * 1000:.2f}")
    print(f"call_p95_ms={p95 * 1000:.2f}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cache benchmark utility")
    parser.add_argument(
        "--store", choices=("inmemory", "cachetools", "redis"), default="inmemory"
    )
    parser.add_argument("--num-calls", type=int, default=1000)
    parser.add_argument("--distinct-keys", type=int, default=20)
    parser.add_argument("--latency-ms", type=float, default=10.0)
    parser.add_argument("--redis-url", type=str, default=None)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    asyncio.run(
        run_benchmark(
            store=args.store,
            num_calls=args.num_calls,
            distinct_keys=args.distinct_keys,
            latency_ms=args.latency_ms,
            redis_url=args.redis_url,
        )
    )


if __name__ == "__main__":
    main()
