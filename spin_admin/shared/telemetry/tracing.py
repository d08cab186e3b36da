"""Span helpers for use-case level tracing.

Spans are no-ops until a TracerProvider is installed at startup, so the
helpers are safe to call from tests and scripts.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

R = TypeVar("R")

_TRACER_NAME = "spin_admin"

AttributeValue = str | int | float | bool


def traced(
    span_name: str,
    **static_attributes: AttributeValue,
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    """Run an async callable inside a span named span_name.

    Arguments are not recorded; call add_span_attributes from the body
    for the values worth keeping (identifier lists can be huge).
    A raised exception marks the span as failed and is re-raised.
    """

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> R:
            tracer = trace.get_tracer(_TRACER_NAME)
            with tracer.start_as_current_span(
                span_name, attributes=static_attributes or None
            ) as span:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise

        return wrapper

    return decorator


def add_span_attributes(**attributes: AttributeValue) -> None:
    """Set attributes on the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)


def add_span_event(name: str, **attributes: AttributeValue) -> None:
    """Record a point-in-time event (e.g. one chunk committed) on the current span."""
    span = trace.get_current_span()
    if span.is_recording():
        span.add_event(name, attributes=attributes)
