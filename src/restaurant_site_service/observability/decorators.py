"""OpenTelemetry tracing decorators."""

import functools
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Span

F = TypeVar("F", bound=Callable[..., Any])


def _mark_failure(span: Span, error: Exception) -> None:
    span.set_attribute("success", False)
    span.set_attribute("error.type", type(error).__name__)
    span.set_attribute("error.message", str(error))
    span.record_exception(error)


def traced(span_name: str | None = None, service_name: str = "site-api") -> Callable[[F], F]:
    """Decorator wrapping a function call in an OpenTelemetry span.

    Works for plain and async functions. The span records whether the call succeeded
    and, on failure, the exception type and message before re-raising.

    Args:
        span_name: Name for the span (defaults to the function name)
        service_name: Service name recorded as a span attribute

    Returns:
        Decorated function with tracing

    Example:
        @traced("translate_to_en", service_name="site-api")
        async def translate_to_en(self, text: str) -> str:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(service_name)
        attributes: dict[str, Any] = {"service.name": service_name}
        if span_name:
            attributes["function.name"] = func.__qualname__

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with tracer.start_as_current_span(name, attributes=attributes) as span:
                    try:
                        result = await func(*args, **kwargs)
                    except Exception as e:
                        _mark_failure(span, e)
                        raise
                    span.set_attribute("success", True)
                    return result

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name, attributes=attributes) as span:
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _mark_failure(span, e)
                    raise
                span.set_attribute("success", True)
                return result

        return sync_wrapper  # type: ignore

    return decorator
