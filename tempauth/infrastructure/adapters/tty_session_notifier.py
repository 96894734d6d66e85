"""Session notifier writing to the account's pseudo-terminals with write(1).

Best-effort by contract: every failure is logged and swallowed, since a
message that cannot be delivered must never stop a restore.
"""

from __future__ import annotations

import os
import pwd
import stat
from collections.abc import Callable
from pathlib import Path

from tempauth.application.ports.session_notifier import SessionNotifier
from tempauth.infrastructure.command_runner import CommandRunner
from tempauth.infrastructure.observability.logging import get_logger_for_adapter


def _uid_of(account: str) -> int | None:
    try:
        return pwd.getpwnam(account).pw_uid
    except KeyError:
        return None


class TtySessionNotifier(SessionNotifier):
    """Writes a message to every /dev/pts/N owned by the account."""

    def __init__(
        self,
        runner: CommandRunner,
        *,
        pts_dir: Path = Path("/dev/pts"),
        write_binary: str = "write",
        uid_lookup: Callable[[str], int | None] = _uid_of,
    ) -> None:
        self._runner = runner
        self._pts_dir = pts_dir
        self._write = write_binary
        self._uid_lookup = uid_lookup
        self._log = get_logger_for_adapter("tty_notifier")

    async def broadcast(self, account: str, message: str) -> None:
        terminals = self.terminals_of(account)
        if not terminals:
            self._log.info("broadcast_no_sessions", account=account)
            return

        for tty in terminals:
            result = await self._runner.run(
                [self._write, account, str(tty)], input_text=message + "\n"
            )
            if result.ok:
                self._log.debug("broadcast_delivered", account=account, tty=str(tty))
            else:
                self._log.warning(
                    "broadcast_failed",
                    account=account,
                    tty=str(tty),
                    output=result.output,
                )

    def terminals_of(self, account: str) -> list[Path]:
        """Character devices in the pts directory owned by ``account``."""
        uid = self._uid_lookup(account)
        if uid is None:
            self._log.warning("broadcast_unknown_account", account=account)
            return []
        found: list[Path] = []
        try:
            entries = sorted(self._pts_dir.iterdir())
        except OSError as e:
            self._log.warning("broadcast_pts_unreadable", path=str(self._pts_dir), error=str(e))
            return []
        for entry in entries:
            try:
                st = os.stat(entry)
            except OSError:
                continue
            if stat.S_ISCHR(st.st_mode) and st.st_uid == uid:
                found.append(entry)
        return found
