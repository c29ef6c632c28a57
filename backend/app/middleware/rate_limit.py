"""
Portfolio Backend — Rate Limiting Middleware
==============================================

What:  Per-IP sliding window limit on /api/* requests
       (default 500 requests per hour).
Why:   The contact, feedback and query forms are anonymous; the limit keeps
       a single client from flooding the tables.

Algorithm: Sliding Window Log
    1. Each IP keeps a list of request timestamps
    2. On each request, timestamps older than the window are dropped
    3. If the remaining count reaches the limit, respond 429
    4. Otherwise record the current timestamp and continue

State is in memory and per process; with several workers each enforces
its own window.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.config import settings
from app.exceptions import AddressExtractionError
from app.middleware.request_id import request_id_var
from app.services.identity import extract_network_address

logger = logging.getLogger(__name__)

LIMITED_PREFIX = "/api/"

# Inactive IPs are swept after this many recorded requests
CLEANUP_EVERY = 1000


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._recorded = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not request.url.path.startswith(LIMITED_PREFIX):
            return await call_next(request)

        try:
            client_ip = extract_network_address(request)
        except AddressExtractionError:
            # No address, no bucket. Handlers that need the address answer 400
            return await call_next(request)

        now = time.time()
        window_start = now - settings.rate_limit_window

        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = timestamps

        if len(timestamps) >= settings.rate_limit_requests:
            retry_after = int(timestamps[0] + settings.rate_limit_window - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(timestamps),
                settings.rate_limit_window,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": "Too many requests from this IP, please try again later.",
                    "details": {"retry_after": retry_after},
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(retry_after)},
            )

        timestamps.append(now)
        self._recorded += 1
        if self._recorded % CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Drop IPs with no request inside the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] < window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
