"""Artifact toggle port - the two on-disk artifacts of "2FA disabled".

The factor-state file is renamed aside and an sshd policy fragment is
written next to the main config. Each mutating operation is a single
filesystem call, so none of them can half-complete on its own. Keeping
the pair consistent is the orchestrator's job.
"""

from abc import ABC, abstractmethod

from tempauth.domain.models.override_request import OverrideRequest
from tempauth.domain.models.toggle_state import ToggleState


class ArtifactToggle(ABC):
    """Abstract interface for applying and reverting the two artifacts."""

    @abstractmethod
    async def apply_factor_override(self, request: OverrideRequest) -> None:
        """Rename the factor-state file to its suffixed path.

        Raises:
            FactorStateMissingError: If the factor-state file does not exist.
            StaleOverrideError: If the suffixed path already exists.
            ToggleError: On any other filesystem failure.
        """
        ...

    @abstractmethod
    async def revert_factor_override(self, request: OverrideRequest) -> None:
        """Rename the suffixed factor-state file back.

        Raises:
            NotDisabledError: If the suffixed file does not exist.
            ToggleError: On any other filesystem failure.
        """
        ...

    @abstractmethod
    async def write_policy_fragment(self, request: OverrideRequest) -> None:
        """Write the account- and address-scoped policy fragment.

        Raises:
            ToggleError: On any write failure.
        """
        ...

    @abstractmethod
    async def remove_policy_fragment(self, request: OverrideRequest) -> None:
        """Delete the policy fragment.

        Raises:
            PolicyFragmentMissingError: If the fragment does not exist.
            ToggleError: On any other filesystem failure.
        """
        ...

    @abstractmethod
    async def state(self, request: OverrideRequest) -> ToggleState:
        """Derive the current toggle state from the artifacts."""
        ...

    async def is_disabled(self, request: OverrideRequest) -> bool:
        """True iff both the suffixed factor file and the fragment exist."""
        return await self.state(request) == ToggleState.DISABLED
