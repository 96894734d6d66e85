"""Async subprocess runner shared by the system adapters.

Adapters never spawn processes themselves; they go through CommandRunner
so tests can substitute a recording fake. A binary that cannot be started or a
timeout is reported as a failed CommandResult rather than raised, leaving the
translation into domain errors to the adapter.
"""

from __future__ import annotations

import asyncio
import shlex
from collections.abc import Sequence
from dataclasses import dataclass

# Conventional shell exit codes
EXIT_NOT_FOUND = 127
EXIT_CANNOT_EXECUTE = 126
EXIT_TIMEOUT = 124

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def cmd(self) -> str:
        return shlex.join(self.argv)

    @property
    def output(self) -> str:
        """stderr if present, else stdout; what to show in an error."""
        return self.stderr.strip() or self.stdout.strip()


class CommandRunner:
    """Runs external commands with asyncio subprocesses."""

    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._timeout = timeout_seconds

    async def run(
        self,
        argv: Sequence[str],
        *,
        input_text: str | None = None,
    ) -> CommandResult:
        """Run ``argv`` and collect its output.

        Args:
            argv: Program and arguments; never passed through a shell.
            input_text: Text written to the process's stdin.

        Returns:
            CommandResult; returncode 127 if the program does not exist, 126
            if it could not be started and 124 if it did not finish within
            the timeout.
        """
        args = tuple(argv)
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            return CommandResult(args, EXIT_NOT_FOUND, "", str(e))
        except OSError as e:
            return CommandResult(args, EXIT_CANNOT_EXECUTE, "", str(e))

        stdin_bytes = input_text.encode() if input_text is not None else None
        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(stdin_bytes), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            return CommandResult(
                args, EXIT_TIMEOUT, "", f"timed out after {self._timeout}s"
            )

        return CommandResult(
            args,
            proc.returncode if proc.returncode is not None else -1,
            stdout.decode(errors="replace"),
            stderr.decode(errors="replace"),
        )
