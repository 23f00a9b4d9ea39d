"""
Observability module.
Contains logging, metrics, and tracing setup.
"""

from inline_queue.observability.logging import build_formatter, setup_logging
from inline_queue.observability.metrics import (
    MetricsCollector,
    NullMetricsCollector,
    setup_metrics,
)
from inline_queue.observability.tracing import create_span, get_tracer, setup_tracing

__all__ = [
    "setup_logging",
    "build_formatter",
    "setup_metrics",
    "MetricsCollector",
    "NullMetricsCollector",
    "setup_tracing",
    "get_tracer",
    "create_span",
]
