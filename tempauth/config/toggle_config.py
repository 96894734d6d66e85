"""Toggle window, failsafe and path configuration.

This module defines the tunables of a toggle run with environment
variable overrides for site-specific layouts.

Environment Variables:
- TEMPAUTH_WINDOW_SECONDS: How long 2FA stays off (default: 30, min: 1, max: 3600)
- TEMPAUTH_POLL_INTERVAL_SECONDS: Watchdog tick (default: 1, min: 1, max: 10)
- TEMPAUTH_FAILSAFE_MARGIN_SECONDS: Extra delay after the window before the
  failsafe job fires (default: 60, min: 0, max: 3600)
- TEMPAUTH_HOME_ROOT: Directory holding home directories (default: /home)
- TEMPAUTH_SSHD_CONFIG_DIR: sshd include directory (default: /etc/ssh/sshd_config.d)
- TEMPAUTH_AUTH_LOG: Activity log watched for new sessions (default: /var/log/auth.log)
- TEMPAUTH_SSHD_SERVICE: systemd unit restarted to apply policy (default: sshd)
- TEMPAUTH_ENV: "development" (console logs) or "production" (JSON logs)
"""

from __future__ import annotations

import math
import os
import sys
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_path_env(key: str, default: Path) -> Path:
    value = os.environ.get(key)
    return Path(value) if value else default


# =============================================================================
# Window Configuration
# =============================================================================

# Default time 2FA stays disabled while waiting for the account to connect
DEFAULT_WINDOW_SECONDS = 30

MIN_WINDOW_SECONDS = 1

# One hour ceiling; longer exemptions defeat the point of a second factor
MAX_WINDOW_SECONDS = 3600

DEFAULT_POLL_INTERVAL_SECONDS = 1

MIN_POLL_INTERVAL_SECONDS = 1

MAX_POLL_INTERVAL_SECONDS = 10

# =============================================================================
# Failsafe Configuration
# =============================================================================

# Failsafe fires this long after the window would have ended
DEFAULT_FAILSAFE_MARGIN_SECONDS = 60

MIN_FAILSAFE_MARGIN_SECONDS = 0

MAX_FAILSAFE_MARGIN_SECONDS = 3600

# =============================================================================
# Paths
# =============================================================================

DEFAULT_HOME_ROOT = Path("/home")
DEFAULT_SSHD_CONFIG_DIR = Path("/etc/ssh/sshd_config.d")
DEFAULT_AUTH_LOG = Path("/var/log/auth.log")
DEFAULT_SSHD_SERVICE = "sshd"
DEFAULT_ENVIRONMENT = "development"

FACTOR_FILE_NAME = ".google_authenticator"
FRAGMENT_FILE_TEMPLATE = "tmp_disabled_2fa_for_{account}.conf"

VALID_ENVIRONMENTS = ("development", "production")


def _check_window(window_seconds: int) -> None:
    if not MIN_WINDOW_SECONDS <= window_seconds <= MAX_WINDOW_SECONDS:
        raise ValueError(
            f"window_seconds must be between {MIN_WINDOW_SECONDS} "
            f"and {MAX_WINDOW_SECONDS}, got {window_seconds}"
        )


def _default_restore_command() -> tuple[str, ...]:
    return (sys.executable, "-m", "tempauth")


@dataclass(frozen=True)
class ToggleConfig:
    """Configuration for one toggle run.

    Attributes:
        window_seconds: How long 2FA stays disabled.
                        Default: 30 seconds. Minimum: 1. Maximum: 3600.
        poll_interval_seconds: Watchdog tick length. Default: 1 second.
        failsafe_margin_seconds: Slack between the end of the window and the
                        failsafe job. Default: 60 seconds.
        home_root: Directory under which <account>/.google_authenticator lives.
        sshd_config_dir: Directory for the per-account policy fragment.
        auth_log_path: Log scanned for new-session records.
        sshd_service: systemd unit restarted to apply the policy.
        environment: Logging environment ("development" or "production").
        restore_command: argv prefix of this tool; the failsafe job appends
                        ``restore <account>``.
    """

    window_seconds: int = DEFAULT_WINDOW_SECONDS
    poll_interval_seconds: int = DEFAULT_POLL_INTERVAL_SECONDS
    failsafe_margin_seconds: int = DEFAULT_FAILSAFE_MARGIN_SECONDS
    home_root: Path = DEFAULT_HOME_ROOT
    sshd_config_dir: Path = DEFAULT_SSHD_CONFIG_DIR
    auth_log_path: Path = DEFAULT_AUTH_LOG
    sshd_service: str = DEFAULT_SSHD_SERVICE
    environment: str = DEFAULT_ENVIRONMENT
    restore_command: tuple[str, ...] = field(default_factory=_default_restore_command)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        _check_window(self.window_seconds)
        if (
            not MIN_POLL_INTERVAL_SECONDS
            <= self.poll_interval_seconds
            <= MAX_POLL_INTERVAL_SECONDS
        ):
            raise ValueError(
                f"poll_interval_seconds must be between {MIN_POLL_INTERVAL_SECONDS} "
                f"and {MAX_POLL_INTERVAL_SECONDS}, got {self.poll_interval_seconds}"
            )
        if (
            not MIN_FAILSAFE_MARGIN_SECONDS
            <= self.failsafe_margin_seconds
            <= MAX_FAILSAFE_MARGIN_SECONDS
        ):
            raise ValueError(
                f"failsafe_margin_seconds must be between {MIN_FAILSAFE_MARGIN_SECONDS} "
                f"and {MAX_FAILSAFE_MARGIN_SECONDS}, got {self.failsafe_margin_seconds}"
            )
        if self.environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {VALID_ENVIRONMENTS}, got {self.environment!r}"
            )
        if not self.restore_command:
            raise ValueError("restore_command cannot be empty")

    @property
    def failsafe_delay(self) -> timedelta:
        """Delay before the failsafe job fires for the configured window."""
        return self.failsafe_delay_for(self.window_seconds)

    def failsafe_delay_for(self, window_seconds: int) -> timedelta:
        """Delay before the failsafe job fires: window plus margin.

        `at` only has minute granularity, so the delay is rounded up to
        whole minutes here rather than in the adapter.

        Raises:
            ValueError: If the window is out of bounds.
        """
        _check_window(window_seconds)
        minutes = max(
            1, math.ceil((window_seconds + self.failsafe_margin_seconds) / 60)
        )
        return timedelta(minutes=minutes)

    def factor_path_for(self, account: str) -> Path:
        return self.home_root / account / FACTOR_FILE_NAME

    def fragment_path_for(self, account: str) -> Path:
        return self.sshd_config_dir / FRAGMENT_FILE_TEMPLATE.format(account=account)

    def restore_argv_for(self, account: str) -> tuple[str, ...]:
        """argv the failsafe job runs to restore ``account``."""
        return (*self.restore_command, "restore", account)

    def with_window(self, window_seconds: int) -> ToggleConfig:
        """Create a copy with a different window (CLI --window override).

        Raises:
            ValueError: If the window is out of bounds.
        """
        return ToggleConfig(
            window_seconds=window_seconds,
            poll_interval_seconds=self.poll_interval_seconds,
            failsafe_margin_seconds=self.failsafe_margin_seconds,
            home_root=self.home_root,
            sshd_config_dir=self.sshd_config_dir,
            auth_log_path=self.auth_log_path,
            sshd_service=self.sshd_service,
            environment=self.environment,
            restore_command=self.restore_command,
        )

    @classmethod
    def from_environment(cls) -> ToggleConfig:
        """Create config from environment variables with defaults.

        Out-of-range integers are clamped; an unknown TEMPAUTH_ENV falls
        back to the default environment.

        Returns:
            ToggleConfig with values from environment or defaults.
        """
        window = _get_int_env("TEMPAUTH_WINDOW_SECONDS", DEFAULT_WINDOW_SECONDS)
        # Clamp to valid range
        window = max(MIN_WINDOW_SECONDS, min(window, MAX_WINDOW_SECONDS))

        poll = _get_int_env(
            "TEMPAUTH_POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS
        )
        poll = max(MIN_POLL_INTERVAL_SECONDS, min(poll, MAX_POLL_INTERVAL_SECONDS))

        margin = _get_int_env(
            "TEMPAUTH_FAILSAFE_MARGIN_SECONDS", DEFAULT_FAILSAFE_MARGIN_SECONDS
        )
        margin = max(MIN_FAILSAFE_MARGIN_SECONDS, min(margin, MAX_FAILSAFE_MARGIN_SECONDS))

        environment = os.environ.get("TEMPAUTH_ENV", DEFAULT_ENVIRONMENT)
        if environment not in VALID_ENVIRONMENTS:
            environment = DEFAULT_ENVIRONMENT

        return cls(
            window_seconds=window,
            poll_interval_seconds=poll,
            failsafe_margin_seconds=margin,
            home_root=_get_path_env("TEMPAUTH_HOME_ROOT", DEFAULT_HOME_ROOT),
            sshd_config_dir=_get_path_env(
                "TEMPAUTH_SSHD_CONFIG_DIR", DEFAULT_SSHD_CONFIG_DIR
            ),
            auth_log_path=_get_path_env("TEMPAUTH_AUTH_LOG", DEFAULT_AUTH_LOG),
            sshd_service=os.environ.get("TEMPAUTH_SSHD_SERVICE") or DEFAULT_SSHD_SERVICE,
            environment=environment,
        )


# Default configuration instance
DEFAULT_TOGGLE_CONFIG = ToggleConfig()
