"""
Order types — entity, status and snapshot.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

# ═══════════════════════════════════════════════════════════════════════════════
# Status — Order Lifecycle
# ═══════════════════════════════════════════════════════════════════════════════


class OrderStatus(str, Enum):
    """
    State of an order.

    Lifecycle:
        PENDING → PAID (terminal)
    """

    PENDING = "PENDING"
    PAID = "PAID"


UNPAID = 0
"""Stored paid_at value while an order is PENDING."""

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_time(ts: int) -> str:
    """Format unix seconds in local time; 0 renders as N/A."""
    if ts == 0:
        return "N/A"
    return time.strftime(TIME_FORMAT, time.localtime(ts))


# ═══════════════════════════════════════════════════════════════════════════════
# Order — Stored State
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Order:
    """
    A stored order.

    Timestamps are unix seconds. paid_at is UNPAID until the order is paid.
    """

    order_no: str
    amount: float
    status: OrderStatus
    created_at: int
    paid_at: int = UNPAID

    @property
    def is_paid(self) -> bool:
        return self.status == OrderStatus.PAID

    def snapshot(self) -> OrderSnapshot:
        return OrderSnapshot(
            order_no=self.order_no,
            amount=self.amount,
            status=self.status.value,
            created_at=format_time(self.created_at),
            paid_at=format_time(self.paid_at) if self.paid_at != UNPAID else None,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Snapshot — Serialized View
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OrderSnapshot:
    """
    Serialized view of an order, as returned to clients and kept in cache.

    Note: status is a plain string so that cached entries round-trip verbatim.
    """

    order_no: str
    amount: float
    status: str
    created_at: str
    paid_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "order_no": self.order_no,
            "amount": self.amount,
            "status": self.status,
            "created_at": self.created_at,
            "paid_at": self.paid_at,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> OrderSnapshot:
        """Decode a cached snapshot. Raises ValueError on malformed input."""
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("snapshot must be a JSON object")
        try:
            return cls(
                order_no=str(data["order_no"]),
                amount=float(data["amount"]),
                status=str(data["status"]),
                created_at=str(data["created_at"]),
                paid_at=data.get("paid_at"),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"malformed snapshot: {e}") from e


@dataclass(frozen=True, slots=True)
class DeleteResult:
    """Confirmation of a deleted order."""

    order_no: str
    deleted: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"deleted": self.deleted, "order_no": self.order_no}


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "OrderStatus",
    "UNPAID",
    "TIME_FORMAT",
    "format_time",
    "Order",
    "OrderSnapshot",
    "DeleteResult",
)
