"""OpenTelemetry tracing decorators."""

import asyncio
import functools
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.util.types import AttributeValue

F = TypeVar("F", bound=Callable[..., Any])


def traced(
    span_name: str | None = None,
    service_name: str = "menu-browser",
    attributes: Mapping[str, AttributeValue] | None = None,
) -> Callable[[F], F]:
    """Decorator to add OpenTelemetry tracing to a function.

    Creates a new span for the decorated function. Fixed ``attributes`` are
    set when the span starts. A list result is counted into
    ``menu.item_count``, and a failure records the exception together with
    the fetch ``error_type`` of menu errors before re-raising. Async
    functions are supported.

    Args:
        span_name: Name for the span (defaults to function name if not provided)
        service_name: Service name for span attributes
        attributes: Span attributes known at decoration time

    Returns:
        Decorated function with tracing

    Example:
        @traced("menu_api.get_dishes", attributes={"menu.resource": "dishes"})
        async def get_dishes(self, menu_id: str) -> list[Dish]:
            ...
    """
    fixed_attributes = dict(attributes or {})

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(service_name)

        def _start(span: trace.Span) -> None:
            span.set_attribute("service.name", service_name)
            if span_name:
                span.set_attribute("function.name", func.__name__)
            for key, value in fixed_attributes.items():
                span.set_attribute(key, value)

        def _succeed(span: trace.Span, result: Any) -> None:
            span.set_attribute("success", True)
            if isinstance(result, list):
                span.set_attribute("menu.item_count", len(result))

        def _fail(span: trace.Span, e: Exception) -> None:
            span.set_attribute("success", False)
            span.set_attribute("error.type", type(e).__name__)
            span.set_attribute("error.message", str(e))
            error_type = getattr(e, "error_type", None)
            if error_type:
                span.set_attribute("menu.error_type", error_type)
            span.record_exception(e)

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name) as span:
                _start(span)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _fail(span, e)
                    raise
                _succeed(span, result)
                return result

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name) as span:
                _start(span)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _fail(span, e)
                    raise
                _succeed(span, result)
                return result

        if asyncio.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator
