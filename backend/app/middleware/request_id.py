"""
Portfolio Backend — Request ID Middleware
===========================================

What:  Tags each request with a short correlation ID and echoes it back in
       the X-Request-ID response header.
Why:   Error bodies carry the same ID, so a visitor's error report can be
       matched to the server log line.
How:   A client-supplied X-Request-ID is reused when it looks sane; otherwise
       an 8-character UUID prefix is generated. The ID lives in a ContextVar
       so loggers and exception handlers can read it.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client IDs end up in log lines; reject anything that could forge one
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def new_request_id() -> str:
    return str(uuid.uuid4())[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get("X-Request-ID", "")
        rid = supplied if _CLIENT_ID_PATTERN.match(supplied) else new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
