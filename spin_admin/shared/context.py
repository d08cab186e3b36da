"""Request id for the task serving the current HTTP request or WebSocket session.

RequestIDMiddleware sets it; RequestIdFilter stamps it on log records.
Listener tasks started inside a session inherit the id it had when
they were created.
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("spin_admin_request_id", default=None)


def set_request_id(request_id: str | None) -> Token:
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    """The current request id, or None outside a request."""
    return _request_id.get()
