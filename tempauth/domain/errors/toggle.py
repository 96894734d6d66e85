"""Artifact toggle errors.

Raised by ArtifactToggle implementations when a rename, create or delete
of one of the two on-disk artifacts fails. In the disable saga these
trigger compensation of the steps that already succeeded; in the restore
saga they are recorded and the remaining steps still run.
"""

from pathlib import Path

from tempauth.domain.exceptions import TempAuthError


class ToggleError(TempAuthError):
    """Base exception for artifact toggle failures."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize with the artifact path involved.

        Args:
            message: Error description.
            path: The artifact path the operation failed on.
        """
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)
        self.path = path


class FactorStateMissingError(ToggleError):
    """Raised when the factor-state file to be suffixed does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__("Factor-state file not found", path)


class StaleOverrideError(ToggleError):
    """Raised when the suffixed factor-state file already exists.

    This signals a stale prior override. The existing file is left
    untouched.
    """

    def __init__(self, path: Path) -> None:
        super().__init__("Override already present", path)


class NotDisabledError(ToggleError):
    """Raised when restoring an account whose second factor is not disabled.

    The restore entry point raises this before touching anything, which is
    what makes a late-firing failsafe job harmless.
    """

    def __init__(self, path: Path | None = None, account: str = "") -> None:
        message = "2FA hasn't been deactivated"
        if account:
            message = f"{message} for account {account}"
        super().__init__(message, path)
        self.account = account


class PolicyFragmentMissingError(ToggleError):
    """Raised when the policy fragment to be removed does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__("Policy fragment not found", path)
