"""Prerequisite and request-resolution errors.

Both are raised before any action is taken, so nothing needs to be
compensated when they occur.
"""

from tempauth.domain.exceptions import TempAuthError


class PrerequisiteError(TempAuthError):
    """Raised when a required capability is missing (root, `at`, `sshd`, ...)."""

    def __init__(self, message: str = "Prerequisite not met", missing: str = "") -> None:
        """Initialize with the missing capability.

        Args:
            message: Error description.
            missing: Name of the missing command or privilege.
        """
        if missing:
            message = f"{message}: {missing}"
        super().__init__(message)
        self.missing = missing


class RequestResolutionError(TempAuthError):
    """Raised when the override request cannot be resolved or is invalid.

    This covers an unknown account, an account name that is not a valid
    POSIX user name, and an address that is neither an IP nor a CIDR.
    """

    def __init__(self, message: str, field: str = "") -> None:
        """Initialize with the offending field.

        Args:
            message: Error description.
            field: Name of the request field that failed to resolve.
        """
        super().__init__(message)
        self.field = field
