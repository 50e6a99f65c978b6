"""
Codecs — transport payloads to lifecycle arguments and results back.

Request models are deliberately loose about presence (missing fields reach
the lifecycle as None, which reports them as INVALID_ARGUMENT) and strict
about JSON types (a string amount is rejected here).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi.responses import JSONResponse
from kungfu import Result, Ok, Error
from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr

from orderly.orders import DeleteResult, OrderError, OrderErrorKind, OrderSnapshot

# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


class CreateOrderIn(BaseModel):
    amount: StrictFloat | StrictInt | None = None


class PayOrderIn(BaseModel):
    order_no: StrictStr | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class SnapshotOut(BaseModel):
    order_no: str
    amount: float
    status: str
    created_at: str
    paid_at: str | None = None

    @classmethod
    def from_domain(cls, dom: OrderSnapshot) -> SnapshotOut:
        return cls(**dom.to_dict())


class OrderListOut(BaseModel):
    orders: list[SnapshotOut]

    @classmethod
    def from_domain(cls, dom: list[OrderSnapshot]) -> OrderListOut:
        return cls(orders=[SnapshotOut.from_domain(s) for s in dom])


class DeletedOut(BaseModel):
    deleted: bool
    order_no: str

    @classmethod
    def from_domain(cls, dom: DeleteResult) -> DeletedOut:
        return cls(**dom.to_dict())


# ═══════════════════════════════════════════════════════════════════════════════
# Result → HTTP
# ═══════════════════════════════════════════════════════════════════════════════

_STATUS: dict[OrderErrorKind, int] = {
    OrderErrorKind.INVALID_ARGUMENT: 400,
    OrderErrorKind.ALREADY_PAID: 400,
    OrderErrorKind.NOT_FOUND: 404,
    OrderErrorKind.CONFLICT: 500,
    OrderErrorKind.CACHE_UNAVAILABLE: 500,
    OrderErrorKind.STORAGE: 500,
}

GENERIC_SERVER_ERROR = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def from_order_error(e: OrderError) -> JSONResponse:
    """Client errors carry their message; server errors never leak details."""
    if e.kind.is_client_error:
        return error_response(_STATUS[e.kind], e.message)
    return error_response(_STATUS[e.kind], GENERIC_SERVER_ERROR)


def respond[T](result: Result[T, OrderError], out: Callable[[T], BaseModel]) -> JSONResponse:
    match result:
        case Ok(value):
            body: Any = out(value).model_dump()
            return JSONResponse(body)
        case Error(e):
            return from_order_error(e)


__all__ = (
    "CreateOrderIn",
    "PayOrderIn",
    "SnapshotOut",
    "OrderListOut",
    "DeletedOut",
    "GENERIC_SERVER_ERROR",
    "error_response",
    "from_order_error",
    "respond",
)
