"""
Structured logging for the Schema Markup Generator.

Every event carries the component that emitted it and the trace id of the
request being served, so one analysis can be followed from fetch through
extraction to generated markup.
"""
import logging
import sys
import uuid
from typing import Optional

import structlog

from schema_markup.config import config


def new_trace_id() -> str:
    return uuid.uuid4().hex[:8]


def set_trace_id(trace_id: Optional[str] = None) -> str:
    """Bind a (new) trace id to the current request context."""
    trace_id = trace_id or new_trace_id()
    structlog.contextvars.bind_contextvars(trace_id=trace_id)
    return trace_id


def get_trace_id() -> str:
    """Return the bound trace id, binding a fresh one if there is none."""
    trace_id = structlog.contextvars.get_contextvars().get("trace_id")
    return trace_id or set_trace_id()


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None):
    """Configure structlog for JSON (default) or console output."""
    log_level = (log_level or config.LOG_LEVEL).upper()
    log_format = log_format or config.LOG_FORMAT

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


class LayerLogger:
    """
    Logger bound to one pipeline component (fetcher, an extractor, the
    extraction layer, the generator).

    Event names are fixed so log queries work across components:
    action_<status>, decision_made, fallback_triggered, error_occurred,
    http_fetch, extraction_completed.
    """

    def __init__(self, layer_name: str):
        self.layer_name = layer_name
        self.logger = get_logger(layer_name).bind(layer=layer_name)

    def log_action(self, action: str, status: str = "started", **extra):
        self.logger.info(f"action_{status}", action=action, **extra)

    def log_decision(self, decision: str, reason: str, url: Optional[str] = None, **extra):
        """A choice the component made on its own (skip, ignore, accept)."""
        self.logger.info("decision_made", decision=decision, reason=reason, url=url, **extra)

    def log_fallback(self, from_source: str, to_source: str, reason: str, **extra):
        """One strategy came back empty and the next one is being tried."""
        self.logger.info(
            "fallback_triggered",
            from_source=from_source,
            to_source=to_source,
            reason=reason,
            **extra
        )

    def log_error(self, error: str, error_type: str = "unknown", **extra):
        self.logger.error("error_occurred", error=error, error_type=error_type, **extra)

    def log_fetch(self, url: str, status_code: Optional[int], result: str, **extra):
        """One HTTP exchange; a redirected fetch logs one event per hop."""
        self.logger.info("http_fetch", url=url, status_code=status_code, result=result, **extra)

    def log_extraction(self, schema_type: str, strategy: Optional[str], items_found: int, **extra):
        # strategy is None when every tier came back empty
        self.logger.info(
            "extraction_completed",
            schema_type=schema_type,
            strategy=strategy,
            items_found=items_found,
            **extra
        )


configure_logging()
