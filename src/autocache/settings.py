"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Cache store settings and explicit config loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_first(*names: str, default: str | None = None) -> str | None:
    """
    Return the first non-empty environment variable in `names`.

    Args:
        *names: Environment variable names to check in order.
        default: Value returned if no non-empty variable is found.
    """
    for name in names:
        raw = os.getenv(name)
        if raw is None:
            continue
        value = raw.strip()
        if value:
            return value
    return default


@dataclass(frozen=True, slots=True)
class AutoCacheSettings:
    """Explicit settings used to build the cache store."""

    store: str = "inmemory"
    sweep_interval_s: float = 60.0
    max_size: int = 10_000

    redis_url: str | None = None
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str | None = None
    redis_prefix: str = "autocache:"

    @staticmethod
    def from_env() -> "AutoCacheSettings":
        """Load settings from `AUTOCACHE_*` environment variables."""
        return AutoCacheSettings(
            store=(_env_first("AUTOCACHE_STORE", default="inmemory") or "inmemory")
            .strip()
            .lower(),
            sweep_interval_s=float(
                _env_first("AUTOCACHE_SWEEP_INTERVAL_S", default="60") or "60"
            ),
            max_size=int(_env_first("AUTOCACHE_MAX_SIZE", default="10000") or "10000"),
            redis_url=_env_first("AUTOCACHE_REDIS_URL"),
            redis_host=_env_first("AUTOCACHE_REDIS_HOST", default="localhost")
            or "localhost",
            redis_port=int(
                _env_first("AUTOCACHE_REDIS_PORT", default="6379") or "6379"
            ),
            redis_db=int(_env_first("AUTOCACHE_REDIS_DB", default="0") or "0"),
            redis_password=_env_first("AUTOCACHE_REDIS_PASSWORD"),
            redis_prefix=_env_first("AUTOCACHE_REDIS_PREFIX", default="autocache:")
            or "autocache:",
        )

    def resolved_redis_url(self) -> str:
        """Return `redis_url`, or one built from host/port/db/password."""
        if self.redis_url:
            return self.redis_url
        if self.redis_password:
            return (
                f"redis://:{self.redis_password}@"
                f"{self.redis_host}:{self.redis_port}/{self.redis_db}"
            )
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"
