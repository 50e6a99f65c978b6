"""
Orders — entity, snapshot, errors and order numbers.

    from orderly import orders as O

    order_no = O.generate_order_no()
    snap = order.snapshot()
"""

from __future__ import annotations

from orderly.orders._types import (
    OrderStatus,
    UNPAID,
    TIME_FORMAT,
    format_time,
    Order,
    OrderSnapshot,
    DeleteResult,
)
from orderly.orders._errors import OrderErrorKind, OrderError, OrderErrors
from orderly.orders._ids import (
    ORDER_NO_PREFIX,
    SUFFIX_BOUND,
    OrderNoGenerator,
    generate_order_no,
)

__all__ = (
    "OrderStatus",
    "UNPAID",
    "TIME_FORMAT",
    "format_time",
    "Order",
    "OrderSnapshot",
    "DeleteResult",
    "OrderErrorKind",
    "OrderError",
    "OrderErrors",
    "ORDER_NO_PREFIX",
    "SUFFIX_BOUND",
    "OrderNoGenerator",
    "generate_order_no",
)
