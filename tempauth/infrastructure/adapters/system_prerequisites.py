"""Prerequisite checks: root privileges and the external commands used."""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Sequence

from tempauth.application.ports.prerequisite_checker import PrerequisiteChecker
from tempauth.domain.errors.prerequisite import PrerequisiteError

# at/atrm: failsafe job, sshd/systemctl: policy reload, write: broadcasts
REQUIRED_COMMANDS: tuple[str, ...] = ("at", "atrm", "sshd", "systemctl", "write")


class SystemPrerequisiteChecker(PrerequisiteChecker):
    """Checks effective uid 0 and that required commands are on PATH."""

    def __init__(
        self,
        commands: Sequence[str] = REQUIRED_COMMANDS,
        *,
        geteuid: Callable[[], int] = os.geteuid,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._commands = tuple(commands)
        self._geteuid = geteuid
        self._which = which

    def verify(self) -> None:
        if self._geteuid() != 0:
            raise PrerequisiteError("This tool must be run as root")
        for command in self._commands:
            if self._which(command) is None:
                raise PrerequisiteError("Required command not found", missing=command)
