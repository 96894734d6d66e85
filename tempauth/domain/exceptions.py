"""Base exception classes for the tempauth domain layer."""


class TempAuthError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so the CLI
    can map any failure to an operator-facing message and a non-zero exit.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
