"""
Pytest configuration and shared fixtures for tempauth tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Ports are replaced with the stubs from tempauth.infrastructure.stubs
- Time-dependent tests use FakeTimeAuthority, never real sleeps
- Unit tests go in tests/unit/
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tempauth.config.toggle_config import ToggleConfig
from tempauth.domain.models.override_request import OverrideRequest, ToggleMode
from tests.helpers import FakeCommandRunner, FakeTimeAuthority


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from tempauth import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Time authority frozen at 2026-01-01T00:00:00Z."""
    return FakeTimeAuthority()


@pytest.fixture
def fake_runner() -> FakeCommandRunner:
    return FakeCommandRunner()


@pytest.fixture
def toggle_config(tmp_path: Path) -> ToggleConfig:
    """Config rooted in a temporary directory."""
    return ToggleConfig(
        home_root=tmp_path / "home",
        sshd_config_dir=tmp_path / "sshd_config.d",
        auth_log_path=tmp_path / "auth.log",
        restore_command=("/usr/bin/python3", "-m", "tempauth"),
    )


@pytest.fixture
def disable_request(toggle_config: ToggleConfig) -> OverrideRequest:
    """DISABLE request for alice from 10.1.1.4."""
    return OverrideRequest(
        account="alice",
        address="10.1.1.4",
        factor_path=toggle_config.factor_path_for("alice"),
        fragment_path=toggle_config.fragment_path_for("alice"),
        mode=ToggleMode.DISABLE,
    )


@pytest.fixture
def restore_request(disable_request: OverrideRequest) -> OverrideRequest:
    """RESTORE request for alice, as the fired failsafe job would resolve it."""
    return OverrideRequest(
        account=disable_request.account,
        address=None,
        factor_path=disable_request.factor_path,
        fragment_path=disable_request.fragment_path,
        mode=ToggleMode.RESTORE,
    )
