"""
Log rendering for the inline queue.

Package modules log through the standard library with ``extra=`` context;
this module renders those records with structlog.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace

from inline_queue.config import get_settings


def add_trace_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add the current span's trace and span ids, if a span is recording."""
    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def build_formatter(log_format: str) -> structlog.stdlib.ProcessorFormatter:
    """
    Build a formatter that renders standard library records.

    ``extra=`` fields (queue, job_class, error, ...) become top-level keys.

    Args:
        log_format: "json" for one JSON object per line, anything else for
            plain console output.
    """
    if log_format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            add_trace_context,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.ExtraAdder(),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def setup_logging(level: str | None = None, log_format: str | None = None) -> logging.Handler:
    """
    Install a stdout handler on the root logger.

    Args:
        level: Overrides ``Settings.log_level``.
        log_format: Overrides ``Settings.log_format`` ("json" or "console").

    Returns:
        The installed handler.
    """
    settings = get_settings()
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(log_format or settings.log_format))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)

    return handler
