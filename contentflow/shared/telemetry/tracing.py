"""Utility functions and decorators for distributed tracing."""

import asyncio
from collections.abc import Callable
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

# Only these kwarg names are recorded as span attributes (case-insensitive).
_SAFE_SPAN_ATTR_KEYS = frozenset({
    "id", "kind", "status", "limit", "skip", "organisation_id", "user_id",
    "flow_id", "state_id", "instance_id", "content_type_id", "approval_id",
    "membership_id", "plan_id", "payment_id", "job_id", "additive",
})


def _set_safe_span_attrs(span: trace.Span, kwargs: dict) -> None:
    for key, value in kwargs.items():
        if not key.startswith("_") and key.lower() in _SAFE_SPAN_ATTR_KEYS:
            span.set_attribute(f"arg.{key}", str(value))


def traced(operation_name: str | None = None) -> Callable:
    """Decorator to create a span around an async or sync function.

    The span is marked ERROR and the exception recorded when the call raises.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(func.__module__)
        span_name = operation_name or f"{func.__module__}.{func.__name__}"

        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name) as span:
                _set_safe_span_attrs(span, kwargs)
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name) as span:
                _set_safe_span_attrs(span, kwargs)
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Add attributes to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


class TracedOperation:
    """Async context manager for a traced operation (used by the job worker)."""

    def __init__(self, operation_name: str, attributes: dict | None = None) -> None:
        self.operation_name = operation_name
        self.attributes = attributes or {}
        self.tracer = trace.get_tracer(__name__)
        self.span: trace.Span | None = None
        self._cm: Any = None
        self._failed = False

    async def __aenter__(self) -> "TracedOperation":
        self._cm = self.tracer.start_as_current_span(self.operation_name)
        self.span = self._cm.__enter__()
        for key, value in self.attributes.items():
            self.span.set_attribute(key, value)
        return self

    def mark_failed(self, exc: BaseException) -> None:
        """Record an exception that was handled inside the block."""
        self._failed = True
        if self.span is not None:
            self.span.record_exception(exc)
            self.span.set_status(Status(StatusCode.ERROR, str(exc)))

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        # The span context manager records the exception and ERROR status itself.
        if self.span is not None and exc_val is None and not self._failed:
            self.span.set_status(Status(StatusCode.OK))
        self._cm.__exit__(exc_type, exc_val, exc_tb)
