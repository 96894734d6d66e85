"""Terminal control port - echo suppression around the watchdog wait."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager


class TerminalControl(ABC):
    """Abstract interface for the controlling terminal."""

    @abstractmethod
    def suppress_echo(self) -> AbstractContextManager[None]:
        """Context manager disabling input echo; restores it on every exit."""
        ...
