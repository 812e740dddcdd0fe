"""
Structured logging for the casbin ArangoDB adapter.

The adapter only obtains loggers; configure_logging is for hosts (and the
example script) that do not set up structlog themselves.
"""

import sys
import logging
from typing import Any, Dict

import structlog
from opentelemetry import trace


def configure_logging(component_name: str, log_level: str = "info") -> None:
    """Render adapter events as JSON lines on stdout."""
    level = getattr(logging, log_level.upper())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            add_component_context,
            add_trace_context,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger(component_name).setLevel(level)


def add_component_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Tag events with the component, the first segment of the logger name."""
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        event_dict["component"] = logger_name.split(".")[0]
    return event_dict


def add_trace_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Attach the host's current OpenTelemetry trace and span ids."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = f"{span_context.trace_id:032x}"
        event_dict["span_id"] = f"{span_context.span_id:016x}"
    return event_dict


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)
