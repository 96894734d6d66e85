"""Stub of PrerequisiteChecker.

NOT suitable for production use.
"""

from __future__ import annotations

from tempauth.application.ports.prerequisite_checker import PrerequisiteChecker
from tempauth.domain.errors.prerequisite import PrerequisiteError


class PrerequisiteCheckerStub(PrerequisiteChecker):
    """Passes unless ``error`` is set."""

    def __init__(self, error: PrerequisiteError | None = None) -> None:
        self.error = error
        self.verified = 0

    def verify(self) -> None:
        self.verified += 1
        if self.error is not None:
            raise self.error
