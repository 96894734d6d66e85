"""Test helpers for tempauth tests.

This package contains reusable test utilities and fake implementations
for dependency injection in unit tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    FakeCommandRunner: Records external commands and returns scripted results

Usage:
    from tests.helpers import FakeCommandRunner, FakeTimeAuthority
"""

from tests.helpers.fake_command_runner import FakeCommandRunner, RecordedCommand
from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = ["FakeCommandRunner", "FakeTimeAuthority", "RecordedCommand"]
