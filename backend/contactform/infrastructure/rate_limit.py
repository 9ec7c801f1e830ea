"""Rate Limiting - per-client token bucket applied before any route runs.

Invariants:
    - One bucket per client address, created full on first sight
    - Rejected requests never reach the route: 429 with Retry-After (whole seconds)
    - Paths under /health are never limited (probes poll from one address)
    - Buckets idle long enough to be full again are evicted, so the map
      only holds recently active clients
    - Bucket bookkeeping has no await between read and write, so it is
      consistent under the single-threaded event loop

Design Decisions:
    - Keyed on the peer address only: X-Forwarded-For is client-controlled
    - Clock injectable for tests (defaults to time.monotonic)
"""

import logging
import math
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from contactform.core.errors import RateLimitExceededError
from contactform.core.token_bucket import TokenBucket

logger = logging.getLogger(__name__)

EXEMPT_PREFIX = "/health"


def get_client_ip(request: Request) -> str:
    """Peer address of the connection, or 'unknown' when the server gives none."""
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Admit per_minute requests per client with a burst allowance."""

    def __init__(
        self,
        app,
        per_minute: int = 1,
        burst: int = 2,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.capacity = burst
        self.refill_per_second = per_minute / 60.0
        self.clock = clock
        self._buckets: dict[str, TokenBucket] = {}
        # seconds an untouched bucket needs to refill completely
        self.idle_ttl = self.capacity / self.refill_per_second
        self._next_sweep: float | None = None

    def _evict_idle(self, now: float) -> None:
        """Drop buckets untouched for idle_ttl. Runs at most once per idle_ttl."""
        if self._next_sweep is not None and now < self._next_sweep:
            return
        self._next_sweep = now + self.idle_ttl
        stale = [
            client for client, bucket in self._buckets.items()
            if bucket.updated_at is not None
            and now - bucket.updated_at >= self.idle_ttl
        ]
        for client in stale:
            del self._buckets[client]

    def _bucket_for(self, client: str, now: float) -> TokenBucket:
        bucket = self._buckets.get(client)
        if bucket is None:
            self._evict_idle(now)
            bucket = TokenBucket(self.capacity, self.refill_per_second)
            self._buckets[client] = bucket
        return bucket

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(EXEMPT_PREFIX):
            return await call_next(request)
        client = get_client_ip(request)
        now = self.clock()
        wait = self._bucket_for(client, now).try_consume(now)
        if wait > 0:
            exc = RateLimitExceededError(max(1, math.ceil(wait)))
            logger.warning(
                "Rate limit exceeded",
                extra={
                    "error_code": exc.code,
                    "client": client,
                    "path": request.url.path,
                },
            )
            return JSONResponse(
                status_code=exc.http_status,
                content=exc.to_response(),
                headers=exc.response_headers(),
            )
        return await call_next(request)
