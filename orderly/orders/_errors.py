"""
Order errors — what the lifecycle manager reports to callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class OrderErrorKind(Enum):
    """Kinds of lifecycle errors."""

    INVALID_ARGUMENT = auto()  # Malformed or out-of-range input
    ALREADY_PAID = auto()  # pay() on a PAID order
    NOT_FOUND = auto()  # No order with that number
    CONFLICT = auto()  # Generated order_no already stored
    CACHE_UNAVAILABLE = auto()  # Cache failure the operation cannot absorb
    STORAGE = auto()  # Store I/O or query failure

    @property
    def is_client_error(self) -> bool:
        return self in _CLIENT_ERRORS


_CLIENT_ERRORS = frozenset(
    {
        OrderErrorKind.INVALID_ARGUMENT,
        OrderErrorKind.ALREADY_PAID,
        OrderErrorKind.NOT_FOUND,
    }
)


@dataclass(frozen=True, slots=True)
class OrderError:
    """
    Lifecycle operation error.

    Note: message is safe to show for client errors only. Server-side kinds
    are logged where they happen and answered with a generic message.
    """

    kind: OrderErrorKind
    message: str


class OrderErrors:
    @staticmethod
    def invalid_argument(msg: str) -> OrderError:
        return OrderError(OrderErrorKind.INVALID_ARGUMENT, msg)

    @staticmethod
    def already_paid() -> OrderError:
        return OrderError(OrderErrorKind.ALREADY_PAID, "Already paid")

    @staticmethod
    def not_found() -> OrderError:
        return OrderError(OrderErrorKind.NOT_FOUND, "Order not found")

    @staticmethod
    def conflict(msg: str) -> OrderError:
        return OrderError(OrderErrorKind.CONFLICT, msg)

    @staticmethod
    def cache_unavailable(msg: str) -> OrderError:
        return OrderError(OrderErrorKind.CACHE_UNAVAILABLE, msg)

    @staticmethod
    def storage(msg: str) -> OrderError:
        return OrderError(OrderErrorKind.STORAGE, msg)


__all__ = ("OrderErrorKind", "OrderError", "OrderErrors")
