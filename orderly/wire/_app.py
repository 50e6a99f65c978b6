"""
Application factory — wires settings, store, cache and lifecycle into FastAPI.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

import fastapi
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orderly.cache import RedisTier, Tier
from orderly.config import Settings
from orderly.lifecycle import OrderLifecycle, order_cache
from orderly.metrics import Metrics
from orderly.store import SQLAlchemyOrderStore, create_database
from orderly.wire._codecs import error_response
from orderly.wire._middleware import api_key_auth, request_logging
from orderly.wire._routes import add_routes, public_paths

logger = logging.getLogger(__name__)


async def _invalid_body(request: Request, exc: Exception) -> JSONResponse:
    logger.info("Rejected body on %s %s: %s", request.method, request.url.path, exc)
    return error_response(400, "Invalid request body")


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        {"error": str(exc.detail), "code": exc.status_code},
        status_code=exc.status_code,
        headers=exc.headers,
    )


def create_app(
    settings: Settings | None = None,
    *,
    cache_tiers: Sequence[Tier[str]] | None = None,
) -> fastapi.FastAPI:
    """
    Build the order service.

    Store and cache handles are opened in the lifespan and closed on
    shutdown. cache_tiers replaces the Redis tier (tests, single process).
    """
    settings = settings or Settings.from_env()
    metrics = Metrics()

    @asynccontextmanager
    async def lifespan(app: fastapi.FastAPI) -> AsyncIterator[None]:
        session_factory, engine = await create_database(settings.database_url)

        redis_tier: RedisTier | None = None
        tiers = cache_tiers
        if tiers is None:
            redis_tier = RedisTier.from_address(settings.redis_host, settings.redis_port)
            tiers = (redis_tier,)

        app.state.lifecycle = OrderLifecycle(
            SQLAlchemyOrderStore(session_factory),
            order_cache(*tiers, ttl=settings.cache_ttl),
            metrics=metrics,
        )
        logger.info(
            "Order service ready (store: %s, cache: %s)",
            settings.database_url,
            ", ".join(t.name for t in tiers),
        )
        try:
            yield
        finally:
            if redis_tier is not None:
                await redis_tier.close()
            await engine.dispose()

    app = fastapi.FastAPI(title="orderly", lifespan=lifespan)
    add_routes(app)

    # Last registered runs first: logging wraps auth
    app.middleware("http")(api_key_auth(settings.api_key, public_paths()))
    app.middleware("http")(request_logging(metrics))

    app.add_exception_handler(RequestValidationError, _invalid_body)
    app.add_exception_handler(StarletteHTTPException, _http_error)

    return app


__all__ = ("create_app",)
