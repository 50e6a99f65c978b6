"""
Order store — typed storage protocol.

All methods return Result for explicit error handling.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Protocol

from kungfu import Result

from orderly.orders._types import Order, OrderStatus


# ═══════════════════════════════════════════════════════════════════════════════
# Store Error
# ═══════════════════════════════════════════════════════════════════════════════


class StoreErrorKind(Enum):
    """Store error kinds."""

    NOT_FOUND = auto()
    CONFLICT = auto()  # Duplicate key, or row not in the expected state
    STORAGE = auto()


@dataclass(frozen=True)
class StoreError:
    """Storage operation error."""

    kind: StoreErrorKind
    message: str
    cause: Exception | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Store Protocol — Typed, Result-based
# ═══════════════════════════════════════════════════════════════════════════════


class OrderStore(Protocol):
    """
    Durable order store protocol.

    Implement this for custom backends. NOT_FOUND and CONFLICT are reported
    as their own kinds; every other failure is STORAGE.
    """

    async def insert(self, order: Order) -> Result[Order, StoreError]:
        """Insert new order. CONFLICT if order_no exists."""
        ...

    async def select(self, order_no: str) -> Result[Order, StoreError]:
        """Get order. NOT_FOUND if absent."""
        ...

    async def update_paid(self, order_no: str, paid_at: int) -> Result[None, StoreError]:
        """
        Mark a PENDING order PAID at paid_at.

        NOT_FOUND if absent, CONFLICT if the order is no longer PENDING.
        """
        ...

    async def delete(self, order_no: str) -> Result[None, StoreError]:
        """Remove order. NOT_FOUND if absent."""
        ...

    async def select_all(
        self, status: OrderStatus | str | None = None
    ) -> Result[list[Order], StoreError]:
        """All orders, optionally with exactly this status."""
        ...


__all__ = ("StoreErrorKind", "StoreError", "OrderStore")
