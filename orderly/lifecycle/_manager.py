"""
Order lifecycle — create, get, pay, list and delete over store + cache.

Consistency model (cache-aside):
    - the store is the source of truth;
    - create writes the store, then caches the PENDING snapshot;
    - pay invalidates the cached entry BEFORE updating the store, so a PAID
      order never has a cached PENDING snapshot;
    - delete removes the row, then invalidates best-effort;
    - get reads the cache first and falls back to the store without
      re-populating the cache;
    - list always reads the store.

Store write and cache write/delete are two independent calls; nothing
makes them atomic. The window in between is bounded by the cache TTL.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import time
from collections.abc import Callable
from datetime import timedelta

from kungfu import Result, Ok, Error

from orderly.cache import DEFAULT_TTL, CacheExecutor, Tier, cache
from orderly.metrics import Metrics
from orderly.orders import (
    DeleteResult,
    Order,
    OrderError,
    OrderErrors,
    OrderNoGenerator,
    OrderSnapshot,
    OrderStatus,
    generate_order_no,
)
from orderly.store import OrderStore, StoreError, StoreErrorKind

logger = logging.getLogger(__name__)


def order_key(order_no: str) -> str:
    """Cache key for an order snapshot."""
    return f"order:{order_no}"


def order_cache(*tiers: Tier[str], ttl: timedelta | None = DEFAULT_TTL) -> CacheExecutor[str, str]:
    """Snapshot cache keyed by order:<order_no>."""
    builder = cache(order_key).ttl(ttl)
    for t in tiers:
        builder = builder.tier(t)
    return builder.build()


def _parse_amount(amount: object) -> float | None:
    """Positive finite float, or None when amount is not one."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return None
    try:
        value = float(amount)
    except OverflowError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def _from_store_error(e: StoreError) -> OrderError:
    match e.kind:
        case StoreErrorKind.NOT_FOUND:
            return OrderErrors.not_found()
        case StoreErrorKind.CONFLICT:
            return OrderErrors.conflict(e.message)
        case _:
            return OrderErrors.storage(e.message)


# ═══════════════════════════════════════════════════════════════════════════════
# Order Lifecycle
# ═══════════════════════════════════════════════════════════════════════════════


class OrderLifecycle:
    """
    Enforces PENDING → PAID and keeps store and cache coherent.

    Example:
        lifecycle = OrderLifecycle(
            S.SQLAlchemyOrderStore(session_factory),
            order_cache(C.LocalTier[str]()),
        )
        match await lifecycle.create(99.99):
            case Ok(snap):
                ...
            case Error(e):
                ...
    """

    def __init__(
        self,
        store: OrderStore,
        cache: CacheExecutor[str, str],
        *,
        clock: Callable[[], float] = time.time,
        id_generator: OrderNoGenerator = generate_order_no,
        metrics: Metrics | None = None,
    ) -> None:
        self._store = store
        self._cache = cache
        self._clock = clock
        self._id_generator = id_generator
        self.metrics = metrics if metrics is not None else Metrics()

    def _now(self) -> int:
        return int(self._clock())

    def _store_failure(self, op: str, order_no: str, e: StoreError) -> OrderError:
        if e.kind is not StoreErrorKind.NOT_FOUND:
            logger.error("Store %s failed for order %s: %s", op, order_no, e.message)
        return _from_store_error(e)

    async def create(self, amount: object) -> Result[OrderSnapshot, OrderError]:
        """
        Create a PENDING order and cache its snapshot.

        A cache failure aborts with CACHE_UNAVAILABLE even though the row is
        already stored; get() still finds the order through the store.
        """
        if amount is None:
            return Error(OrderErrors.invalid_argument("Missing amount"))
        value = _parse_amount(amount)
        if value is None:
            return Error(OrderErrors.invalid_argument("Amount must be a positive number"))

        order = Order(
            order_no=self._id_generator(),
            amount=value,
            status=OrderStatus.PENDING,
            created_at=self._now(),
        )

        match await self._store.insert(order):
            case Error(e):
                return Error(self._store_failure("insert", order.order_no, e))
            case Ok(_):
                pass

        snap = order.snapshot()
        match await self._cache.set(order.order_no, snap.to_json()):
            case Error(e):
                logger.error("Cache SET failed for order %s: %s", order.order_no, e.message)
                return Error(OrderErrors.cache_unavailable(e.message))
            case Ok(_):
                ttl = self._cache.ttl
                logger.info(
                    "Cached order %s (TTL: %ss)",
                    order.order_no,
                    int(ttl.total_seconds()) if ttl else "none",
                )

        self.metrics.orders_created += 1
        return Ok(snap)

    async def get(self, order_no: str) -> Result[OrderSnapshot, OrderError]:
        """Cached snapshot if present, otherwise the stored order."""
        if not order_no:
            return Error(OrderErrors.invalid_argument("Missing order_no"))

        match await self._cache.get(order_no):
            case Ok(None):
                self.metrics.cache_misses += 1
                logger.info("Cache miss for order %s", order_no)
            case Ok(raw):
                try:
                    snap = OrderSnapshot.from_json(raw)
                except ValueError as e:
                    logger.warning("Ignoring undecodable cache entry for order %s: %s", order_no, e)
                else:
                    self.metrics.cache_hits += 1
                    logger.info("Cache hit for order %s", order_no)
                    return Ok(snap)
            case Error(e):
                logger.warning("Cache GET failed for order %s, reading store: %s", order_no, e.message)

        match await self._store.select(order_no):
            case Ok(order):
                return Ok(order.snapshot())
            case Error(e):
                return Error(self._store_failure("select", order_no, e))

    async def pay(self, order_no: object) -> Result[OrderSnapshot, OrderError]:
        """
        Mark a PENDING order PAID.

        The cache entry is invalidated first; if that fails the store is left
        untouched and CACHE_UNAVAILABLE is returned.
        """
        if not isinstance(order_no, str) or not order_no:
            return Error(OrderErrors.invalid_argument("Missing order_no"))

        match await self._store.select(order_no):
            case Ok(found):
                order = found
            case Error(e):
                return Error(self._store_failure("select", order_no, e))

        if order.is_paid:
            return Error(OrderErrors.already_paid())

        match await self._cache.invalidate(order_no):
            case Error(e):
                logger.error("Cache DEL failed for order %s: %s", order_no, e.message)
                return Error(OrderErrors.cache_unavailable(e.message))
            case Ok(_):
                logger.info("Invalidated cached order %s", order_no)

        paid_at = self._now()
        match await self._store.update_paid(order_no, paid_at):
            case Error(e) if e.kind is StoreErrorKind.CONFLICT:
                # Lost the race to a concurrent pay
                return Error(OrderErrors.already_paid())
            case Error(e):
                return Error(self._store_failure("update", order_no, e))
            case Ok(_):
                pass

        self.metrics.orders_paid += 1
        paid = dataclasses.replace(order, status=OrderStatus.PAID, paid_at=paid_at)
        return Ok(paid.snapshot())

    async def list(self, status: OrderStatus | str | None = None) -> Result[list[OrderSnapshot], OrderError]:
        """Stored orders, optionally with exactly this status. Never cached."""
        match await self._store.select_all(status or None):
            case Ok(orders):
                return Ok([o.snapshot() for o in orders])
            case Error(e):
                logger.error("Store list failed: %s", e.message)
                return Error(_from_store_error(e))

    async def delete(self, order_no: str) -> Result[DeleteResult, OrderError]:
        """Delete the stored order; cache invalidation is best-effort."""
        if not order_no:
            return Error(OrderErrors.invalid_argument("Missing order_no"))

        match await self._store.delete(order_no):
            case Error(e):
                return Error(self._store_failure("delete", order_no, e))
            case Ok(_):
                pass

        match await self._cache.invalidate(order_no):
            case Error(e):
                logger.warning("Cache DEL failed for order %s (non-blocking): %s", order_no, e.message)
            case Ok(_):
                logger.info("Deleted order %s from cache", order_no)

        return Ok(DeleteResult(order_no=order_no))


__all__ = ("OrderLifecycle", "order_key", "order_cache")
