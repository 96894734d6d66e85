"""Stub of TerminalControl recording echo suppression.

NOT suitable for production use.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from tempauth.application.ports.terminal_control import TerminalControl


class TerminalControlStub(TerminalControl):
    """Counts entries and exits of suppress_echo()."""

    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0

    @property
    def echo_suppressed(self) -> bool:
        return self.entered > self.exited

    @contextmanager
    def suppress_echo(self) -> Iterator[None]:
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1
