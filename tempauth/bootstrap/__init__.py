"""Bootstrap wiring: logging setup and the dependency container."""

from tempauth.bootstrap.container import Container, build_container
from tempauth.bootstrap.logging import configure_structlog

__all__ = ["Container", "build_container", "configure_structlog"]
