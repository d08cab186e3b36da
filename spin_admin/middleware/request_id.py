"""X-Request-ID for every HTTP request and WebSocket session.

A client-supplied id is reused only if it is short and made of
[A-Za-z0-9_-]; anything else is replaced by a fresh UUID so it cannot
inject text into log lines. The id is held in a contextvar for the
logging filter, stored on scope["state"], and echoed on HTTP responses.
Written as raw ASGI because BaseHTTPMiddleware does not see WebSockets.
"""

import re
import uuid
from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any

from spin_admin.shared.context import reset_request_id, set_request_id

Scope = MutableMapping[str, Any]
Message = MutableMapping[str, Any]
ASGIApp = Callable[[Scope, Callable, Callable], Awaitable[None]]

_SAFE_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


def _incoming_id(scope: Scope, header: bytes) -> str | None:
    for name, value in scope.get("headers") or ():
        if name.lower() == header:
            return value.decode("latin-1").strip()
    return None


def _resolve_request_id(candidate: str | None) -> str:
    if candidate and _SAFE_ID.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: ASGIApp, header_name: str = "X-Request-ID") -> ASGIApp:
    """Wrap app so each http/websocket scope runs with a request id."""
    header = header_name.lower().encode("latin-1")

    async def middleware(scope: Scope, receive: Callable, send: Callable) -> None:
        if scope["type"] not in ("http", "websocket"):
            await app(scope, receive, send)
            return

        request_id = _resolve_request_id(_incoming_id(scope, header))
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (header, request_id.encode("latin-1")),
                ]
            await send(message)

        token = set_request_id(request_id)
        try:
            await app(scope, receive, send_with_id)
        finally:
            reset_request_id(token)

    return middleware
