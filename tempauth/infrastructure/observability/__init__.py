"""Observability infrastructure: structlog configuration and run IDs."""

from tempauth.infrastructure.observability.correlation import (
    generate_run_id,
    get_run_id,
    run_id_processor,
    set_run_id,
)
from tempauth.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_adapter,
)

__all__: list[str] = [
    "configure_structlog",
    "generate_run_id",
    "get_logger_for_adapter",
    "get_run_id",
    "run_id_processor",
    "set_run_id",
]
