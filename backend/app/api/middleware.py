"""API middleware for request processing."""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with a request id, status and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        start_time = time.monotonic()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "%s %s failed after %.3fs: %s",
                request.method,
                request.url.path,
                time.monotonic() - start_time,
                e,
                extra={"request_id": request_id},
            )
            raise

        duration = time.monotonic() - start_time
        logger.info(
            "%s %s -> %s in %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            duration,
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_s": round(duration, 3),
                "client": request.client.host if request.client else "unknown",
            },
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window request limit per client address.

    Write requests (anything but GET/HEAD/OPTIONS) are counted; reads are not.
    """

    _READ_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})

    def __init__(self, app, max_requests: int = 60, period: int = 60) -> None:
        super().__init__(app)
        self.max_requests = max_requests
        self.period = period
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_cleanup = time.monotonic()

    def _cleanup_stale_clients(self, now: float) -> None:
        """Drop windows that have expired, at most once per period."""
        if now - self._last_cleanup < self.period:
            return
        stale = [cid for cid, (start, _) in self._windows.items() if now - start >= self.period]
        for cid in stale:
            del self._windows[cid]
        self._last_cleanup = now

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method in self._READ_METHODS:
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        now = time.monotonic()
        self._cleanup_stale_clients(now)
        window_start, count = self._windows.get(client_id, (now, 0))
        if now - window_start >= self.period:
            window_start, count = now, 0

        if count >= self.max_requests:
            retry_after = max(1, int(self.period - (now - window_start)))
            logger.warning("Rate limit exceeded for %s", client_id)
            return JSONResponse(
                status_code=429,
                content={"error": "RateLimitExceeded", "message": "Too many requests"},
                headers={"Retry-After": str(retry_after)},
            )

        self._windows[client_id] = (window_start, count + 1)
        return await call_next(request)
