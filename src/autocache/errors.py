"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error types raised by the caching layer.
"""

from __future__ import annotations


class AutoCacheError(RuntimeError):
    """Base class for all autocache failures."""


class AutoCacheConfigError(AutoCacheError):
    """Raised when caching is configured incorrectly. Never retryable."""


class InfiniteCachingNotAllowedError(AutoCacheConfigError):
    """Raised when a TTL of zero is used without `allow_infinite_caching`."""

    def __init__(self, method: str | None = None) -> None:
        self.method = method
        target = f"Method '{method}'" if method else "Method"
        super().__init__(
            f"{target} does not allow infinite caching. You can set "
            "allow_infinite_caching=True if you really want to, but in general "
            "all caches should have a ttl to auto expire."
        )


class MethodNotConfiguredError(AutoCacheConfigError):
    """Raised when looking up a method that has no registered cache."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method {method} not configured in AutoCache.")


class InvalidCacheClientError(AutoCacheConfigError):
    """Raised when a store adapter receives an unusable client instance."""
