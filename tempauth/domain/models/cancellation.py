"""Cooperative cancellation token.

Set from a signal handler, read only at the watchdog's poll boundary.
Once cancelled it stays cancelled.
"""


class CancellationToken:
    """One-way flag signalling that the wait should end early."""

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str = "cancelled") -> None:
        """Mark the token cancelled. Later calls keep the first reason."""
        if not self._cancelled:
            self._cancelled = True
            self._reason = reason
