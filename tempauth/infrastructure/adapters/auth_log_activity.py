"""Activity log adapter reading systemd-logind records from auth.log.

A successful SSH login produces a line such as:

    Oct 19 10:30:05 host systemd-logind[612]: New session 42 of user alice.

The log is only ever read. The offset is a line count, so if the file
shrinks below it (rotation during the wait) reading restarts at the top of
the new file.
"""

from __future__ import annotations

import asyncio
import re
from itertools import islice
from pathlib import Path

from tempauth.application.ports.activity_log import ActivityLog
from tempauth.infrastructure.observability.logging import get_logger_for_adapter


def session_pattern(account: str) -> re.Pattern[str]:
    """Regex matching a logind new-session record for ``account``."""
    return re.compile(
        r"^.*logind\[[0-9]+\]: New session [0-9a-z]+ of user "
        + re.escape(account)
        + r"\.$"
    )


class AuthLogActivity(ActivityLog):
    """Tails the auth log from a line offset."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._log = get_logger_for_adapter("auth_log")

    async def snapshot(self) -> int:
        return await asyncio.to_thread(self._count_lines)

    async def has_session_since(self, account: str, offset: int) -> bool:
        return await asyncio.to_thread(self._scan, session_pattern(account), offset)

    def _count_lines(self) -> int:
        try:
            with self._path.open("r", errors="replace") as f:
                return sum(1 for _ in f)
        except FileNotFoundError:
            self._log.warning("activity_log_missing", path=str(self._path))
            return 0

    def _scan(self, pattern: re.Pattern[str], offset: int) -> bool:
        try:
            with self._path.open("r", errors="replace") as f:
                lines = list(islice(f, offset, None))
        except FileNotFoundError:
            return False
        if not lines and offset and self._count_lines() < offset:
            self._log.info("activity_log_rotated", path=str(self._path), offset=offset)
            return self._scan(pattern, 0)
        return any(pattern.match(line.rstrip("\n")) for line in lines)
