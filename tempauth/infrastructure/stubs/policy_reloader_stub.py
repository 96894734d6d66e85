"""In-memory stub of PolicyReloader.

Results are queued per call so a test can let the disable saga's
activation succeed and the restore saga's activation fail.

NOT suitable for production use.
"""

from __future__ import annotations

from tempauth.application.ports.policy_reloader import PolicyReloader
from tempauth.domain.errors.policy import PolicyReloadError, PolicyValidationError


class PolicyReloaderStub(PolicyReloader):
    """Counts validations and applications.

    Attributes:
        validate_errors: Errors raised by successive validate() calls;
            None entries (or an empty queue) mean success.
        apply_errors: Same for apply().
        calls: "validate" / "apply", in call order.
    """

    def __init__(self) -> None:
        self.validate_errors: list[PolicyValidationError | None] = []
        self.apply_errors: list[PolicyReloadError | None] = []
        self.calls: list[str] = []

    @property
    def apply_count(self) -> int:
        return self.calls.count("apply")

    async def validate(self) -> None:
        self.calls.append("validate")
        if self.validate_errors:
            error = self.validate_errors.pop(0)
            if error is not None:
                raise error

    async def apply(self) -> None:
        self.calls.append("apply")
        if self.apply_errors:
            error = self.apply_errors.pop(0)
            if error is not None:
                raise error
