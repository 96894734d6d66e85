"""Prerequisite checker port - capabilities needed before any action."""

from abc import ABC, abstractmethod


class PrerequisiteChecker(ABC):
    """Abstract interface for verifying privileges and required commands."""

    @abstractmethod
    def verify(self) -> None:
        """Check every prerequisite.

        Raises:
            PrerequisiteError: Naming the first missing capability.
        """
        ...
