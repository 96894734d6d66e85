"""Terminal control via termios.

Echo is switched off while the watchdog waits so stray keystrokes do not
garble the countdown. When stdin is not a terminal (the at job, tests,
pipes) the context manager does nothing.
"""

from __future__ import annotations

import sys
import termios
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from tempauth.application.ports.terminal_control import TerminalControl


class TermiosTerminal(TerminalControl):
    """Echo suppression on the process's controlling terminal."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdin

    @contextmanager
    def suppress_echo(self) -> Iterator[None]:
        if not self._stream.isatty():
            yield
            return

        fd = self._stream.fileno()
        saved = termios.tcgetattr(fd)
        quiet = termios.tcgetattr(fd)
        quiet[3] &= ~termios.ECHO
        termios.tcsetattr(fd, termios.TCSADRAIN, quiet)
        try:
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
