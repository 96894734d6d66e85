"""Unit tests for ToggleConfig."""

from __future__ import annotations

import sys
from datetime import timedelta
from pathlib import Path

import pytest

from tempauth.config.toggle_config import (
    DEFAULT_TOGGLE_CONFIG,
    DEFAULT_WINDOW_SECONDS,
    MAX_WINDOW_SECONDS,
    ToggleConfig,
)

_ENV_KEYS = (
    "TEMPAUTH_WINDOW_SECONDS",
    "TEMPAUTH_POLL_INTERVAL_SECONDS",
    "TEMPAUTH_FAILSAFE_MARGIN_SECONDS",
    "TEMPAUTH_HOME_ROOT",
    "TEMPAUTH_SSHD_CONFIG_DIR",
    "TEMPAUTH_AUTH_LOG",
    "TEMPAUTH_SSHD_SERVICE",
    "TEMPAUTH_ENV",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestDefaults:
    def test_default_values(self) -> None:
        config = DEFAULT_TOGGLE_CONFIG
        assert config.window_seconds == DEFAULT_WINDOW_SECONDS == 30
        assert config.poll_interval_seconds == 1
        assert config.failsafe_margin_seconds == 60
        assert config.home_root == Path("/home")
        assert config.sshd_config_dir == Path("/etc/ssh/sshd_config.d")
        assert config.auth_log_path == Path("/var/log/auth.log")
        assert config.sshd_service == "sshd"
        assert config.environment == "development"

    def test_default_restore_command_runs_this_interpreter(self) -> None:
        assert ToggleConfig().restore_command == (sys.executable, "-m", "tempauth")


class TestValidation:
    @pytest.mark.parametrize("window", [0, -5, MAX_WINDOW_SECONDS + 1])
    def test_window_out_of_range(self, window: int) -> None:
        with pytest.raises(ValueError, match="window_seconds"):
            ToggleConfig(window_seconds=window)

    def test_poll_interval_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="poll_interval_seconds"):
            ToggleConfig(poll_interval_seconds=0)

    def test_margin_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="failsafe_margin_seconds"):
            ToggleConfig(failsafe_margin_seconds=-1)

    def test_unknown_environment(self) -> None:
        with pytest.raises(ValueError, match="environment"):
            ToggleConfig(environment="staging")

    def test_empty_restore_command(self) -> None:
        with pytest.raises(ValueError, match="restore_command"):
            ToggleConfig(restore_command=())


class TestDerivedValues:
    """Tests for paths and the failsafe delay."""

    def test_factor_and_fragment_paths(self) -> None:
        config = ToggleConfig(home_root=Path("/srv/home"), sshd_config_dir=Path("/etc/ssh/conf.d"))
        assert config.factor_path_for("alice") == Path("/srv/home/alice/.google_authenticator")
        assert config.fragment_path_for("alice") == Path(
            "/etc/ssh/conf.d/tmp_disabled_2fa_for_alice.conf"
        )

    def test_failsafe_fires_after_window_plus_margin(self) -> None:
        config = ToggleConfig(window_seconds=30, failsafe_margin_seconds=60)
        # 90 seconds rounds up to 2 whole minutes
        assert config.failsafe_delay == timedelta(minutes=2)
        assert config.failsafe_delay > timedelta(seconds=config.window_seconds)

    def test_failsafe_delay_is_at_least_one_minute(self) -> None:
        config = ToggleConfig(window_seconds=1, failsafe_margin_seconds=0)
        assert config.failsafe_delay == timedelta(minutes=1)

    def test_failsafe_delay_exact_minutes(self) -> None:
        config = ToggleConfig(window_seconds=120, failsafe_margin_seconds=60)
        assert config.failsafe_delay == timedelta(minutes=3)

    def test_failsafe_delay_for_a_longer_window(self) -> None:
        config = ToggleConfig(window_seconds=30, failsafe_margin_seconds=60)
        # 3600 + 60 seconds is exactly 61 minutes
        assert config.failsafe_delay_for(3600) == timedelta(minutes=61)
        assert config.failsafe_delay_for(3600) > timedelta(seconds=3600)

    @pytest.mark.parametrize("window", [0, -5, 3601])
    def test_failsafe_delay_for_rejects_out_of_range_window(self, window: int) -> None:
        with pytest.raises(ValueError, match="window_seconds must be between"):
            ToggleConfig().failsafe_delay_for(window)

    def test_restore_argv(self) -> None:
        config = ToggleConfig(restore_command=("/opt/tempauth/bin/tempauth",))
        assert config.restore_argv_for("alice") == (
            "/opt/tempauth/bin/tempauth",
            "restore",
            "alice",
        )

    def test_with_window_keeps_other_fields(self) -> None:
        config = ToggleConfig(home_root=Path("/srv/home"), failsafe_margin_seconds=10)

        changed = config.with_window(90)

        assert changed.window_seconds == 90
        assert changed.home_root == Path("/srv/home")
        assert changed.failsafe_margin_seconds == 10
        assert config.window_seconds == 30

    def test_with_window_validates(self) -> None:
        with pytest.raises(ValueError):
            ToggleConfig().with_window(0)


class TestFromEnvironment:
    def test_defaults_when_unset(self, clean_env: pytest.MonkeyPatch) -> None:
        config = ToggleConfig.from_environment()
        assert config.window_seconds == 30
        assert config.environment == "development"

    def test_reads_overrides(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("TEMPAUTH_WINDOW_SECONDS", "45")
        clean_env.setenv("TEMPAUTH_POLL_INTERVAL_SECONDS", "2")
        clean_env.setenv("TEMPAUTH_FAILSAFE_MARGIN_SECONDS", "120")
        clean_env.setenv("TEMPAUTH_HOME_ROOT", "/srv/home")
        clean_env.setenv("TEMPAUTH_SSHD_CONFIG_DIR", "/etc/ssh/conf.d")
        clean_env.setenv("TEMPAUTH_AUTH_LOG", "/var/log/secure")
        clean_env.setenv("TEMPAUTH_SSHD_SERVICE", "ssh")
        clean_env.setenv("TEMPAUTH_ENV", "production")

        config = ToggleConfig.from_environment()

        assert config.window_seconds == 45
        assert config.poll_interval_seconds == 2
        assert config.failsafe_margin_seconds == 120
        assert config.home_root == Path("/srv/home")
        assert config.sshd_config_dir == Path("/etc/ssh/conf.d")
        assert config.auth_log_path == Path("/var/log/secure")
        assert config.sshd_service == "ssh"
        assert config.environment == "production"

    def test_clamps_out_of_range_values(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("TEMPAUTH_WINDOW_SECONDS", "999999")
        clean_env.setenv("TEMPAUTH_POLL_INTERVAL_SECONDS", "0")

        config = ToggleConfig.from_environment()

        assert config.window_seconds == MAX_WINDOW_SECONDS
        assert config.poll_interval_seconds == 1

    def test_ignores_garbage(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("TEMPAUTH_WINDOW_SECONDS", "thirty")
        clean_env.setenv("TEMPAUTH_ENV", "staging")

        config = ToggleConfig.from_environment()

        assert config.window_seconds == 30
        assert config.environment == "development"
