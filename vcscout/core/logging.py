"""
Structured logging configuration for VC Scout.

Provides consistent, structured logging with correlation IDs and rich formatting.
"""

import logging
import sys
import uuid
from typing import Optional

import structlog
from rich.console import Console
from rich.logging import RichHandler

# Global correlation ID for request tracing
_correlation_id: Optional[str] = None


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Set a correlation ID for the current execution context."""
    global _correlation_id
    _correlation_id = correlation_id or str(uuid.uuid4())[:8]
    return _correlation_id


def add_correlation_id(logger, method_name, event_dict):
    """Add correlation ID to log entries."""
    if _correlation_id:
        event_dict["correlation_id"] = _correlation_id
    return event_dict


def setup_logging(debug: bool = False, rich_output: bool = True) -> None:
    """
    Configure structured logging for the application.

    Args:
        debug: Enable debug level logging
        rich_output: Use rich formatting for console output, JSON lines otherwise
    """
    level = logging.DEBUG if debug else logging.INFO

    processors = [
        structlog.contextvars.merge_contextvars,
        add_correlation_id,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.dev.set_exc_info,
    ]

    if rich_output:
        console = Console(stderr=True)
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True, exception_formatter=structlog.dev.rich_traceback
            )
        )
        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
        logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# Request-boundary logger for the HTTP API
api_logger = structlog.get_logger("api")
