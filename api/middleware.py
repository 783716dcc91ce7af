"""
Request-level middleware: timing header and access log.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

# Paths polled by load balancers; not worth an access-log line each.
_QUIET_PATHS = {"/health"}


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        if request.url.path not in _QUIET_PATHS:
            # path only: query strings and headers may carry credentials
            logger.debug(
                "%s %s -> %d (%.3fs)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed,
            )
        return response
