"""
OpenTelemetry tracing setup.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)
from opentelemetry.trace import Span, Tracer

from inline_queue import __version__
from inline_queue.config import get_settings

# Tracer installed by setup_tracing(); falls back to the global (no-op) one
_tracer: Tracer | None = None


def setup_tracing(
    span_exporter: SpanExporter | None = None,
    enable_console_export: bool = False,
) -> Tracer:
    """
    Set up OpenTelemetry tracing for queue operations.

    Spans are exported synchronously since the queue itself is synchronous.

    Args:
        span_exporter: Optional exporter receiving every finished span.
        enable_console_export: If True, also export spans to console.

    Returns:
        Tracer: The tracer instance.
    """
    global _tracer

    settings = get_settings()

    resource = Resource.create(
        {
            "service.name": settings.service_name,
            "service.version": __version__,
        }
    )

    provider = TracerProvider(resource=resource)

    if span_exporter is not None:
        provider.add_span_processor(SimpleSpanProcessor(span_exporter))

    if enable_console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    _tracer = provider.get_tracer(settings.service_name, __version__)

    return _tracer


def reset_tracing() -> None:
    """Drop the tracer installed by setup_tracing()."""
    global _tracer
    _tracer = None


def get_tracer() -> Tracer:
    """
    Get the tracer instance.

    Returns:
        Tracer: The configured tracer, or the global provider's tracer
        (a no-op unless the application installed one).
    """
    if _tracer is None:
        return trace.get_tracer(get_settings().service_name)
    return _tracer


@contextmanager
def create_span(name: str, **attributes: Any) -> Iterator[Span]:
    """
    Open a span with the given name and attributes.

    Exceptions raised inside the block are recorded on the span and re-raised.

    Args:
        name: Span name.
        **attributes: Span attributes; None values are skipped.
    """
    with get_tracer().start_as_current_span(name) as span:
        for key, value in attributes.items():
            if value is not None:
                span.set_attribute(key, str(value))
        yield span
