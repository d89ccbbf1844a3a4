"""
Request Logging Middleware

Logs one line per request with method, path, status and duration, and
tags the response with an X-Request-ID (the client's, or a fresh UUID).
"""

import logging
import time
import uuid
from collections.abc import Iterable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for every request/response pair."""

    def __init__(self, app, exempt_paths: Iterable[str] | None = None) -> None:
        super().__init__(app)
        self.exempt_paths = set(exempt_paths or [])

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()
        path = request.url.path
        method = request.method

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(f"{method} {path} failed after {duration_ms:.1f}ms [{request_id}]")
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        if path not in self.exempt_paths:
            logger.info(
                f"{method} {path} -> {response.status_code} "
                f"({duration_ms:.1f}ms) [{request_id}]"
            )

        response.headers.setdefault("X-Request-ID", request_id)
        return response
