"""
Cache builder — fluent API.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from combinators import lift as L
from kungfu import Result, Ok, Error

from orderly._types import Lazy
from orderly.cache._types import Tier, CacheError, CacheErrorKind

DEFAULT_TTL = timedelta(seconds=300)

# ═══════════════════════════════════════════════════════════════════════════════
# Key Function Type
# ═══════════════════════════════════════════════════════════════════════════════

type KeyFn[K] = Callable[[K], str]


def _attempt[R](t: Tier[object], op: str, fn: Callable[[], Awaitable[R]]) -> Lazy[R, CacheError]:
    return L.catching_async(
        fn,
        on_error=lambda e: CacheError(CacheErrorKind.CONNECTION, f"{t.name} {op} failed: {e}"),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Cache Builder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class Cache[K, T]:
    """
    Fluent cache builder.

    Type parameters:
        K: Key input type
        T: Value type

    Example:
        order_cache = (
            C.cache(lambda order_no: f"order:{order_no}")
            .tier(C.RedisTier.from_address("127.0.0.1"))
            .ttl(timedelta(seconds=300))
            .build()
        )
    """

    _key_fn: KeyFn[K]
    _tiers: tuple[Tier[T], ...]
    _ttl: timedelta | None

    def tier(self, t: Tier[T]) -> Cache[K, T]:
        """Add cache tier."""
        return Cache(_key_fn=self._key_fn, _tiers=(*self._tiers, t), _ttl=self._ttl)

    def ttl(self, ttl: timedelta | None) -> Cache[K, T]:
        """Expiry for every written entry."""
        return Cache(_key_fn=self._key_fn, _tiers=self._tiers, _ttl=ttl)

    def build(self) -> CacheExecutor[K, T]:
        """Build executable cache."""
        return CacheExecutor(key_fn=self._key_fn, tiers=self._tiers, ttl=self._ttl)


# ═══════════════════════════════════════════════════════════════════════════════
# Cache Executor
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class CacheExecutor[K, T]:
    """
    Compiled cache executor.

    Cache-aside only: it never fetches from a source on miss. Callers decide
    what a miss or a failure means for them.
    """

    key_fn: KeyFn[K]
    tiers: tuple[Tier[T], ...]
    ttl: timedelta | None

    def key(self, key: K) -> str:
        return self.key_fn(key)

    async def get(self, key: K) -> Result[T | None, CacheError]:
        """
        Get value from cache.

        Tries tiers in order and returns the first hit. Ok(None) is a miss;
        Error is returned only when no tier hit and at least one failed.
        """
        cache_key = self.key_fn(key)
        failure: CacheError | None = None

        for t in self.tiers:
            match await _attempt(t, "GET", lambda t=t: t.get(cache_key)):
                case Ok(value) if value is not None:
                    return Ok(value)
                case Ok(_):
                    continue
                case Error(e):
                    failure = e

        return Error(failure) if failure is not None else Ok(None)

    async def set(self, key: K, value: T) -> Result[None, CacheError]:
        """Write value to every tier; first failure is returned."""
        cache_key = self.key_fn(key)
        ttl = self.ttl

        for t in self.tiers:
            match await _attempt(t, "SET", lambda t=t: t.set(cache_key, value, ttl)):
                case Ok(_):
                    continue
                case Error(e):
                    return Error(e)

        return Ok(None)

    async def invalidate(self, key: K) -> Result[bool, CacheError]:
        """Invalidate key in all tiers; first failure is returned."""
        cache_key = self.key_fn(key)
        deleted = False

        for t in self.tiers:
            match await _attempt(t, "DEL", lambda t=t: t.delete(cache_key)):
                case Ok(existed):
                    deleted = deleted or existed
                case Error(e):
                    return Error(e)

        return Ok(deleted)


# ═══════════════════════════════════════════════════════════════════════════════
# cache() — Entry Point
# ═══════════════════════════════════════════════════════════════════════════════


def cache[K](key: KeyFn[K]) -> Cache[K, str]:
    """
    Create cache builder with key function.

    Example:
        from orderly import cache as C

        order_cache = C.cache(order_key).tier(C.LocalTier[str]()).build()
        match await order_cache.get(order_no):
            case Ok(None): ...  # miss
            case Ok(raw): ...  # hit
            case Error(e): ...  # tier failure
    """
    return Cache(_key_fn=key, _tiers=(), _ttl=DEFAULT_TTL)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("DEFAULT_TTL", "KeyFn", "Cache", "CacheExecutor", "cache")
