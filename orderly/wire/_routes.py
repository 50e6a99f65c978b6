"""
Routes — HTTP verbs/paths to lifecycle operations.
"""

from collections.abc import Callable
from typing import Annotated, Any

import fastapi
from fastapi import Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from orderly.lifecycle import OrderLifecycle
from orderly.wire._codecs import (
    CreateOrderIn,
    DeletedOut,
    OrderListOut,
    PayOrderIn,
    SnapshotOut,
    respond,
)
from orderly.wire._triggers import HTTPRouteTrigger


def get_lifecycle(request: Request) -> OrderLifecycle:
    return request.app.state.lifecycle


Lifecycle = Annotated[OrderLifecycle, Depends(get_lifecycle)]


# ═══════════════════════════════════════════════════════════════════════════════
# Order Handlers
# ═══════════════════════════════════════════════════════════════════════════════


async def create_order(req: CreateOrderIn, lifecycle: Lifecycle) -> JSONResponse:
    return respond(await lifecycle.create(req.amount), SnapshotOut.from_domain)


async def get_order(order_no: str, lifecycle: Lifecycle) -> JSONResponse:
    return respond(await lifecycle.get(order_no), SnapshotOut.from_domain)


async def pay_order(req: PayOrderIn, lifecycle: Lifecycle) -> JSONResponse:
    return respond(await lifecycle.pay(req.order_no), SnapshotOut.from_domain)


async def list_orders(lifecycle: Lifecycle, status: str | None = None) -> JSONResponse:
    return respond(await lifecycle.list(status), OrderListOut.from_domain)


async def delete_order(order_no: str, lifecycle: Lifecycle) -> JSONResponse:
    return respond(await lifecycle.delete(order_no), DeletedOut.from_domain)


# ═══════════════════════════════════════════════════════════════════════════════
# Service Handlers
# ═══════════════════════════════════════════════════════════════════════════════


async def healthcheck() -> PlainTextResponse:
    return PlainTextResponse("OK")


async def metrics(lifecycle: Lifecycle) -> JSONResponse:
    return JSONResponse(lifecycle.metrics.as_dict())


ROUTES: tuple[tuple[HTTPRouteTrigger, Callable[..., Any]], ...] = (
    (HTTPRouteTrigger("POST", "/order/create"), create_order),
    (HTTPRouteTrigger("GET", "/order/get/{order_no}"), get_order),
    (HTTPRouteTrigger("POST", "/order/pay"), pay_order),
    (HTTPRouteTrigger("GET", "/order/list"), list_orders),
    (HTTPRouteTrigger("DELETE", "/order/delete/{order_no}"), delete_order),
    (HTTPRouteTrigger("GET", "/healthcheck", public=True), healthcheck),
    (HTTPRouteTrigger("GET", "/metrics", public=True), metrics),
)


def public_paths() -> frozenset[str]:
    return frozenset(trigger.path for trigger, _ in ROUTES if trigger.public)


def add_routes(app: fastapi.FastAPI) -> None:
    for trigger, handler in ROUTES:
        app.add_api_route(trigger.path, handler, methods=[trigger.method])
