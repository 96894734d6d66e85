"""Policy reload errors.

A composed policy that fails its dry-run check is never applied live; the
orchestrator removes the fragment instead.
"""

from tempauth.domain.exceptions import TempAuthError


class PolicyError(TempAuthError):
    """Base exception for policy validation and reload failures."""

    def __init__(self, message: str, output: str = "") -> None:
        """Initialize with the enforcing service's output.

        Args:
            message: Error description.
            output: Diagnostic output of the failed command (stderr).
        """
        if output:
            message = f"{message}: {output.strip()}"
        super().__init__(message)
        self.output = output


class PolicyValidationError(PolicyError):
    """Raised when the composed policy fails the dry-run check."""


class PolicyReloadError(PolicyError):
    """Raised when the enforcing service could not be restarted."""
