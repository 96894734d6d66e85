"""Structured logging configuration with structlog.

This module provides centralized structlog configuration for the tool,
supporting both production (JSON) and development (console) output modes.
Log entries go to stderr so they never interleave with the CLI's own
output on stdout.

Log Entry Format (production):
    {
        "timestamp": "2026-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "failsafe_scheduled",
        "run_id": "uuid",
        "service": "ToggleOrchestratorService",
        ...additional context
    }

Usage:
    from tempauth.infrastructure.observability import configure_structlog

    configure_structlog(environment="production")  # JSON output
    configure_structlog(environment="development")  # Console output
"""

import logging
import os
import sys
from typing import cast

import structlog
from structlog.typing import Processor

from tempauth.infrastructure.observability.correlation import run_id_processor

# Environment variable for log level (default: INFO)
LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Get the configured log level from environment.

    Returns:
        The logging level integer (e.g., logging.INFO).
    """
    level_name = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_structlog(environment: str = "production") -> None:
    """Configure structlog for the tool.

    Should be called once at startup, before any service is created.

    Args:
        environment: 'production' for JSON output, 'development' for console.
                    Defaults to 'production'.
    """
    shared_processors: list[Processor] = [
        # Merge context from contextvars
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, run_id_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        # JSON output for the at(1) job's mail and log shippers
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger_for_adapter(adapter_name: str) -> structlog.BoundLogger:
    """Get a logger pre-bound with the adapter name.

    Args:
        adapter_name: Short name of the adapter (e.g. "at_scheduler").

    Returns:
        A BoundLogger with adapter and component bound.
    """
    return structlog.get_logger().bind(adapter=adapter_name, component="infrastructure")
