"""Configuration module for tempauth.

Available Configurations:
- ToggleConfig: Window length, failsafe delay and artifact locations
"""

from tempauth.config.toggle_config import (
    DEFAULT_TOGGLE_CONFIG,
    MAX_WINDOW_SECONDS,
    MIN_WINDOW_SECONDS,
    ToggleConfig,
)

__all__ = [
    "ToggleConfig",
    "DEFAULT_TOGGLE_CONFIG",
    "MIN_WINDOW_SECONDS",
    "MAX_WINDOW_SECONDS",
]
