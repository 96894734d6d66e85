"""Session notifier port - short messages to the account's terminals."""

from abc import ABC, abstractmethod


class SessionNotifier(ABC):
    """Abstract interface for broadcasting to an account's active sessions.

    Delivery is best-effort. Implementations log failures and never raise.
    """

    @abstractmethod
    async def broadcast(self, account: str, message: str) -> None:
        """Write ``message`` to every active session of ``account``."""
        ...
