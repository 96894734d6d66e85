"""In-memory stub of ActivityLog.

NOT suitable for production use.
"""

from __future__ import annotations

from tempauth.application.ports.activity_log import ActivityLog


class ActivityLogStub(ActivityLog):
    """Holds (account, kind) records in append order.

    Attributes:
        records: (account, kind) pairs, oldest first.
        read_error: Raised by has_session_since() when set.
    """

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []
        self.read_error: BaseException | None = None

    def append_session(self, account: str) -> None:
        """Append a new-session record for ``account`` (test helper)."""
        self.records.append((account, "session"))

    def append_noise(self, account: str = "someone") -> None:
        """Append a record that is not a new session (test helper)."""
        self.records.append((account, "noise"))

    async def snapshot(self) -> int:
        return len(self.records)

    async def has_session_since(self, account: str, offset: int) -> bool:
        if self.read_error is not None:
            raise self.read_error
        return any(
            who == account and kind == "session" for who, kind in self.records[offset:]
        )
