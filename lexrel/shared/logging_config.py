# lexrel/shared/logging_config.py
"""
Structured logging for lexrel.

The library modules only call `structlog.get_logger()`. The application that
embeds lexrel calls `configure_logging()` once at startup, next to
`setup_telemetry()`, before opening any embedding store.
"""

import logging
import sys
from typing import Optional

import structlog
from opentelemetry import trace

from lexrel.shared.config import settings

def add_open_telemetry_spans(_, __, event_dict):
    """
    Processor to inject the current TraceID and SpanID into the log entry.
    Links e.g. an `embedding_lookup_failed` event to the span of the query.
    """
    span = trace.get_current_span()
    if not span.is_recording():
        event_dict["trace_id"] = None
        event_dict["span_id"] = None
        return event_dict

    ctx = span.get_span_context()
    event_dict["trace_id"] = format(ctx.trace_id, "032x")
    event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict

def build_processors(log_format: str):
    """The structlog processor chain, ending with the renderer for `log_format`."""
    processors = [
        structlog.contextvars.merge_contextvars,     # Merge context bound by the caller
        add_open_telemetry_spans,                    # Inject Trace IDs
        structlog.processors.add_log_level,          # Add "level": "info"
        structlog.processors.TimeStamper(fmt="iso"), # Add "timestamp": "2024-..."
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        # Production: Machine-readable JSON
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Development: Human-readable colored console output
        processors.append(structlog.dev.ConsoleRenderer())
    return processors

def configure_logging(log_format: Optional[str] = None, log_level: Optional[str] = None) -> None:
    """
    Configures structlog and the standard logging library to emit
    structured JSON logs (Production) or colored text logs (Development).
    """
    log_format = log_format or settings.LOG_FORMAT
    log_level = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=build_processors(log_format),
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(log_level)),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Standard library loggers (e.g., telemetry setup) share the stream and level
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
