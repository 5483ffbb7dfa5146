"""
Blade Stock Backend — Mutation Rate Limiting Middleware
=========================================================

What:  Per-IP sliding window limit on mutating requests (POST, DELETE).
How:   Keeps the timestamps of each client's recent mutations in memory;
       once rate_limit_requests fall inside rate_limit_window seconds, further
       mutations get 429 with a Retry-After header until the oldest one ages out.

Reads (GET, OPTIONS, HEAD) are never limited. Every mutation is guarded by a
short shared password, and this window bounds how fast it can be guessed.

State is per process. Under several uvicorn workers each worker counts on its own.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from bladestock.config import settings
from bladestock.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

LIMITED_METHODS = {"POST", "DELETE"}


class RateLimitMiddleware(BaseHTTPMiddleware):
    # Idle clients are swept after this many recorded mutations
    SWEEP_EVERY = 500

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)
        self._recorded = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method not in LIMITED_METHODS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window_start = now - settings.rate_limit_window

        timestamps = self._requests[client_ip]
        while timestamps and timestamps[0] <= window_start:
            timestamps.popleft()

        if len(timestamps) >= settings.rate_limit_requests:
            retry_after = int(timestamps[0] + settings.rate_limit_window - now) + 1
            error = RateLimitExceededError(retry_after=retry_after)
            logger.warning(
                "Rate limit exceeded for IP %s: %d mutations in %ds window",
                client_ip,
                len(timestamps),
                settings.rate_limit_window,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": error.message,
                    "details": error.context,
                },
                headers={"Retry-After": str(retry_after)},
            )

        timestamps.append(now)
        self._recorded += 1
        if self._recorded % self.SWEEP_EVERY == 0:
            self._sweep_idle_clients(window_start)

        return await call_next(request)

    def _sweep_idle_clients(self, window_start: float) -> None:
        idle = [
            ip for ip, stamps in self._requests.items()
            if not stamps or stamps[-1] <= window_start
        ]
        for ip in idle:
            del self._requests[ip]
        if idle:
            logger.debug("Dropped rate-limit state for %d idle clients", len(idle))
