"""
Cache — tiered snapshot cache with expiry.

    from orderly import cache as C

    order_cache = C.cache(lambda no: f"order:{no}").tier(C.LocalTier[str]()).build()
    result = await order_cache.get(order_no)
"""

from __future__ import annotations

from orderly.cache._types import (
    Tier,
    LocalTier,
    CacheError,
    CacheErrorKind,
)
from orderly.cache._builder import DEFAULT_TTL, cache, Cache, CacheExecutor
from orderly.cache._redis import RedisTier

__all__ = (
    "Tier",
    "LocalTier",
    "CacheError",
    "CacheErrorKind",
    "DEFAULT_TTL",
    "cache",
    "Cache",
    "CacheExecutor",
    "RedisTier",
)
