"""
Portfolio Backend — Request Body Sanitization Middleware
==========================================================

What:  Strips HTML markup from every string in JSON request bodies.
Why:   Visitor-submitted names, emails and messages are rendered by the
       admin frontend; stored markup would execute there.
How:   Pure ASGI middleware. For JSON requests the body is buffered, decoded,
       each string value (at any nesting depth) is passed through nh3.clean
       with no allowed tags, and the re-encoded body is replayed to the app.

Behavior:
    - "<b>Hi</b>"                   → "Hi"
    - "<script>alert(1)</script>ok" → "ok" (script content removed too)
    - Numbers, booleans and null are left as they are.
    - JSON means what FastAPI parses as JSON: application/json,
      application/*+json, or a body sent without a Content-Type.
    - Non-JSON bodies and malformed JSON pass through untouched; FastAPI
      rejects the latter with its usual 422.

Why ASGI (not BaseHTTPMiddleware):
    BaseHTTPMiddleware cannot replace the body that downstream handlers
    read; wrapping `receive` can.
"""

import json
import logging
from typing import Any, Dict, List

import nh3
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

_BODY_METHODS = {"POST", "PUT", "PATCH"}


def clean_text(value: str) -> str:
    """Remove all tags from a string, dropping script/style content."""
    return nh3.clean(value, tags=set())


def sanitize_value(value: Any) -> Any:
    """Recursively sanitize strings inside a decoded JSON value."""
    if isinstance(value, str):
        return clean_text(value)
    if isinstance(value, dict):
        return {key: sanitize_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [sanitize_value(item) for item in value]
    return value


def _is_json(scope: Scope) -> bool:
    """
    True for every body FastAPI would decode as JSON: no Content-Type at
    all, application/json, or any application/*+json type.
    """
    for name, raw in scope.get("headers", []):
        if name == b"content-type":
            media_type = raw.split(b";")[0].strip().lower()
            if not media_type:
                return True
            maintype, _, subtype = media_type.partition(b"/")
            return maintype == b"application" and (
                subtype == b"json" or subtype.endswith(b"+json")
            )
    return True


class SanitizeBodyMiddleware:
    """Applies sanitize_value to JSON bodies of POST/PUT/PATCH requests."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] != "http"
            or scope.get("method") not in _BODY_METHODS
            or not _is_json(scope)
        ):
            await self.app(scope, receive, send)
            return

        chunks: List[bytes] = []
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                # Client went away mid-body; let the app observe the disconnect
                await self.app(scope, _replay([message], receive), send)
                return
            chunks.append(message.get("body", b""))
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        body = self._sanitize_body(body)

        scope = dict(scope)
        scope["headers"] = [
            (name, raw) for name, raw in scope.get("headers", []) if name != b"content-length"
        ] + [(b"content-length", str(len(body)).encode("latin-1"))]

        await self.app(
            scope,
            _replay([{"type": "http.request", "body": body, "more_body": False}], receive),
            send,
        )

    @staticmethod
    def _sanitize_body(body: bytes) -> bytes:
        if not body:
            return body
        try:
            payload = json.loads(body)
        except (ValueError, UnicodeDecodeError):
            return body
        return json.dumps(sanitize_value(payload)).encode("utf-8")


def _replay(messages: List[Dict[str, Any]], receive: Receive) -> Receive:
    """Serve buffered messages first, then defer to the original receive."""
    pending = list(messages)

    async def replay_receive() -> Message:
        if pending:
            return pending.pop(0)
        return await receive()

    return replay_receive
