"""API middleware for request processing."""

import logging
import time
import uuid
from collections import defaultdict
from typing import Callable, Iterable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

_STALE_CLIENT_THRESHOLD = 300  # seconds before a silent client's entry is evicted


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses.

    Every response carries an ``X-Request-ID`` header, taken from the request
    when the client sent one.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and log details."""
        start_time = time.monotonic()
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex

        logger.info(
            "Request: %s %s",
            request.method,
            request.url.path,
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else "unknown",
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.monotonic() - start_time
            logger.error(
                "Request failed after %.3fs: %s",
                process_time,
                e,
                extra={"request_id": request_id, "process_time_s": round(process_time, 3)},
            )
            raise

        process_time = time.monotonic() - start_time
        logger.info(
            "Response: %s in %.3fs",
            response.status_code,
            process_time,
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "process_time_s": round(process_time, 3),
            },
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window rate limiting for checkout writes.

    Only POST requests to ``paths`` are counted. Evicts stale client entries
    periodically to prevent unbounded memory growth.
    """

    def __init__(
        self,
        app,
        requests_per_period: int = 30,
        period_seconds: int = 60,
        paths: Iterable[str] = (),
    ) -> None:
        super().__init__(app)
        self.requests_per_period = requests_per_period
        self.period_seconds = period_seconds
        self.paths = frozenset(paths)
        self._request_counts: dict[str, list[float]] = defaultdict(list)
        self._last_cleanup = time.monotonic()

    def _cleanup_stale_clients(self, now: float) -> None:
        """Remove entries for clients that have not sent requests recently."""
        if now - self._last_cleanup < _STALE_CLIENT_THRESHOLD:
            return
        cutoff = now - _STALE_CLIENT_THRESHOLD
        stale = [cid for cid, ts in self._request_counts.items() if not ts or ts[-1] < cutoff]
        for cid in stale:
            del self._request_counts[cid]
        self._last_cleanup = now

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Check rate limits and process request."""
        if request.method != "POST" or request.url.path not in self.paths:
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        now = time.monotonic()
        window_start = now - self.period_seconds

        # Evict expired timestamps for this client
        timestamps = self._request_counts[client_id]
        self._request_counts[client_id] = [t for t in timestamps if t > window_start]

        # Periodically evict idle clients
        self._cleanup_stale_clients(now)

        if len(self._request_counts[client_id]) >= self.requests_per_period:
            logger.warning("Rate limit exceeded for %s on %s", client_id, request.url.path)
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "error": "Too many requests. Please try again later.",
                    "retry_after": self.period_seconds,
                },
                headers={"Retry-After": str(self.period_seconds)},
            )

        self._request_counts[client_id].append(now)
        return await call_next(request)
