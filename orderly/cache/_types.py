"""
Cache types.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum, auto
from typing import Protocol

# ═══════════════════════════════════════════════════════════════════════════════
# Tier Protocol — Backends Implement This
# ═══════════════════════════════════════════════════════════════════════════════


class Tier[T](Protocol):
    """
    Cache tier protocol.

    Implement this for custom backends (Redis, Memcached, etc.)
    Methods may raise; the executor turns exceptions into CacheError.
    """

    @property
    def name(self) -> str:
        """Tier name for logs."""
        ...

    async def get(self, key: str) -> T | None:
        """Get value. Returns None on miss or expiry."""
        ...

    async def set(self, key: str, value: T, ttl: timedelta | None = None) -> None:
        """Set value, expiring after ttl when given."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True if existed."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Local Tier — In-Memory LRU with Expiry
# ═══════════════════════════════════════════════════════════════════════════════


class LocalTier[T]:
    """
    In-memory LRU cache tier with per-entry expiry.

    Example:
        tier = LocalTier[str](max_size=1000)
    """

    def __init__(
        self,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_size = max_size
        self._clock = clock
        self._cache: dict[str, tuple[T, float | None]] = {}
        self._order: list[str] = []

    @property
    def name(self) -> str:
        return "local"

    def __len__(self) -> int:
        return len(self._cache)

    async def get(self, key: str) -> T | None:
        entry = self._cache.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            self._drop(key)
            return None
        # Move to end (most recent)
        self._order.remove(key)
        self._order.append(key)
        return value

    async def set(self, key: str, value: T, ttl: timedelta | None = None) -> None:
        if key in self._cache:
            self._order.remove(key)
        elif len(self._cache) >= self._max_size:
            # Evict oldest
            oldest = self._order.pop(0)
            del self._cache[oldest]

        expires_at = self._clock() + ttl.total_seconds() if ttl is not None else None
        self._cache[key] = (value, expires_at)
        self._order.append(key)

    async def delete(self, key: str) -> bool:
        if key in self._cache:
            self._drop(key)
            return True
        return False

    def _drop(self, key: str) -> None:
        del self._cache[key]
        self._order.remove(key)


# ═══════════════════════════════════════════════════════════════════════════════
# Cache Error
# ═══════════════════════════════════════════════════════════════════════════════


class CacheErrorKind(Enum):
    """Cache error kinds."""

    CONNECTION = auto()


@dataclass(frozen=True, slots=True)
class CacheError:
    """Cache operation error."""

    kind: CacheErrorKind
    message: str


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "Tier",
    "LocalTier",
    "CacheError",
    "CacheErrorKind",
)
