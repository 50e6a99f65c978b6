"""
Wire — the HTTP surface.

    from orderly.wire import create_app

    app = create_app()  # settings from the environment
    # uvicorn.run(app, port=8080)
"""

from orderly.wire._app import create_app
from orderly.wire._codecs import (
    CreateOrderIn,
    PayOrderIn,
    SnapshotOut,
    OrderListOut,
    DeletedOut,
)
from orderly.wire._triggers import HTTPRouteTrigger, Method, Path
from orderly.wire._routes import ROUTES

__all__ = (
    "create_app",
    "CreateOrderIn",
    "PayOrderIn",
    "SnapshotOut",
    "OrderListOut",
    "DeletedOut",
    "HTTPRouteTrigger",
    "Method",
    "Path",
    "ROUTES",
)
