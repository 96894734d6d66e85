"""Activity log port - where new sessions of the account show up.

The log is append-only and read-only for us. The watchdog takes a
snapshot offset before it starts waiting, so only records appended during
the wait count.
"""

from abc import ABC, abstractmethod


class ActivityLog(ABC):
    """Abstract interface for reading session-open records."""

    @abstractmethod
    async def snapshot(self) -> int:
        """Return the current end offset (line count) of the log."""
        ...

    @abstractmethod
    async def has_session_since(self, account: str, offset: int) -> bool:
        """Check for a new-session record of ``account`` after ``offset``.

        Args:
            account: Account whose sessions we watch for.
            offset: Line count returned by snapshot().

        Returns:
            True if a matching record was appended after the offset.
        """
        ...
