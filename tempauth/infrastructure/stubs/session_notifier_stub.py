"""In-memory stub of SessionNotifier.

NOT suitable for production use.
"""

from __future__ import annotations

from tempauth.application.ports.session_notifier import SessionNotifier


class SessionNotifierStub(SessionNotifier):
    """Records broadcasts as (account, message) pairs.

    Attributes:
        messages: Delivered (account, message) pairs.
        error: Raised by broadcast() when set; nothing is recorded.
    """

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []
        self.error: Exception | None = None

    async def broadcast(self, account: str, message: str) -> None:
        if self.error is not None:
            raise self.error
        self.messages.append((account, message))

    def messages_for(self, account: str) -> list[str]:
        return [message for who, message in self.messages if who == account]
