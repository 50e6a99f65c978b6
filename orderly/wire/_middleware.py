"""
Middleware — shared-secret auth and request logging.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response

from orderly.metrics import Metrics
from orderly.wire._codecs import error_response

logger = logging.getLogger(__name__)

type CallNext = Callable[[Request], Awaitable[Response]]
type HTTPMiddleware = Callable[[Request, CallNext], Awaitable[Response]]


def api_key_auth(api_key: str, public: frozenset[str]) -> HTTPMiddleware:
    """Reject requests whose Authorization header is not exactly api_key."""

    async def middleware(request: Request, call_next: CallNext) -> Response:
        if request.url.path in public:
            return await call_next(request)
        if request.headers.get("Authorization") != api_key:
            return error_response(401, "Unauthorized")
        return await call_next(request)

    return middleware


def request_logging(metrics: Metrics) -> HTTPMiddleware:
    """Log every request with status and latency; count it."""

    async def middleware(request: Request, call_next: CallNext) -> Response:
        metrics.total_requests += 1
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        logger.info(
            "%s %s %s (%d ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        if response.status_code >= 400:
            logger.warning(
                "Error %s on %s %s", response.status_code, request.method, request.url.path
            )
        return response

    return middleware


__all__ = ("api_key_auth", "request_logging")
