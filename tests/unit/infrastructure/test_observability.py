"""Unit tests for structlog configuration and run IDs."""

from __future__ import annotations

import re
from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from tempauth.application.services.base import LoggingMixin
from tempauth.infrastructure.observability import (
    configure_structlog,
    generate_run_id,
    get_logger_for_adapter,
    get_run_id,
    run_id_processor,
    set_run_id,
)


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    set_run_id("")


class TestConfigureStructlog:
    """Tests for configure_structlog function."""

    def test_production_uses_json_renderer(self) -> None:
        configure_structlog(environment="production")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert run_id_processor in processors

    def test_development_uses_console_renderer(self) -> None:
        configure_structlog(environment="development")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_log_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        configure_structlog(environment="production")

        wrapper = structlog.get_config()["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(30)


class TestRunId:
    def test_generate_returns_uuid4(self) -> None:
        assert re.match(
            r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
            generate_run_id(),
        )

    def test_set_and_get(self) -> None:
        set_run_id("run-1")
        assert get_run_id() == "run-1"

    def test_processor_stamps_run_id(self) -> None:
        set_run_id("run-1")
        assert run_id_processor(None, "info", {"event": "x"}) == {
            "event": "x",
            "run_id": "run-1",
        }

    def test_processor_skips_empty_run_id(self) -> None:
        set_run_id("")
        assert run_id_processor(None, "info", {"event": "x"}) == {"event": "x"}


class TestLoggerBinding:
    def test_adapter_logger_binds_adapter_name(self) -> None:
        with capture_logs() as logs:
            get_logger_for_adapter("at_scheduler").info("failsafe_job_created")

        assert logs[0]["adapter"] == "at_scheduler"
        assert logs[0]["component"] == "infrastructure"

    def test_logging_mixin_binds_service_and_operation(self) -> None:
        class RestoreService(LoggingMixin):
            def __init__(self) -> None:
                self._init_logger()

        with capture_logs() as logs:
            RestoreService()._log_operation("restore", account="alice").info(
                "restore_started"
            )

        assert logs[0]["service"] == "RestoreService"
        assert logs[0]["component"] == "toggle"
        assert logs[0]["operation"] == "restore"
        assert logs[0]["account"] == "alice"
