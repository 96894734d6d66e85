"""In-memory stub of ArtifactToggle for development and testing.

Mirrors the filesystem adapter's contract (which errors are raised when)
without touching the disk. Failures can be injected per operation.

NOT suitable for production use.
"""

from __future__ import annotations

from pathlib import Path

from tempauth.application.ports.artifact_toggle import ArtifactToggle
from tempauth.domain.errors.toggle import (
    FactorStateMissingError,
    NotDisabledError,
    PolicyFragmentMissingError,
    StaleOverrideError,
    ToggleError,
)
from tempauth.domain.models.override_request import OverrideRequest
from tempauth.domain.models.toggle_state import ToggleState


class ArtifactToggleStub(ArtifactToggle):
    """Tracks artifact presence in three flags.

    Attributes:
        factor_present: The factor-state file is at its original path.
        override_present: The suffixed factor-state file exists.
        fragment_present: The policy fragment exists.
        calls: Names of the operations invoked, in order.
        fail_on: Operation name -> error raised instead of acting.
    """

    def __init__(
        self,
        *,
        factor_present: bool = True,
        override_present: bool = False,
        fragment_present: bool = False,
    ) -> None:
        self.factor_present = factor_present
        self.override_present = override_present
        self.fragment_present = fragment_present
        self.calls: list[str] = []
        self.fail_on: dict[str, ToggleError] = {}

    def fail(self, operation: str, error: ToggleError | None = None) -> None:
        """Make ``operation`` raise ``error`` (test helper)."""
        self.fail_on[operation] = error or ToggleError(
            f"injected failure in {operation}", Path("/stub")
        )

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise self.fail_on[operation]

    async def apply_factor_override(self, request: OverrideRequest) -> None:
        self._enter("apply_factor_override")
        if self.override_present:
            raise StaleOverrideError(request.disabled_factor_path)
        if not self.factor_present:
            raise FactorStateMissingError(request.factor_path)
        self.factor_present = False
        self.override_present = True

    async def revert_factor_override(self, request: OverrideRequest) -> None:
        self._enter("revert_factor_override")
        if not self.override_present:
            raise NotDisabledError(request.disabled_factor_path, account=request.account)
        self.override_present = False
        self.factor_present = True

    async def write_policy_fragment(self, request: OverrideRequest) -> None:
        self._enter("write_policy_fragment")
        self.fragment_present = True

    async def remove_policy_fragment(self, request: OverrideRequest) -> None:
        self._enter("remove_policy_fragment")
        if not self.fragment_present:
            raise PolicyFragmentMissingError(request.fragment_path)
        self.fragment_present = False

    async def state(self, request: OverrideRequest) -> ToggleState:
        return ToggleState.from_artifacts(self.override_present, self.fragment_present)
