"""Account directory port - does a login name exist on this host?"""

from abc import ABC, abstractmethod


class AccountDirectory(ABC):
    """Abstract interface for looking up local accounts."""

    @abstractmethod
    def account_exists(self, account: str) -> bool:
        ...
