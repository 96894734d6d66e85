"""Policy reloader port - the gate between "artifacts changed" and "live".

Rule: never apply an unvalidated policy. Callers run validate() first and
only call apply() when it succeeded.
"""

from abc import ABC, abstractmethod


class PolicyReloader(ABC):
    """Abstract interface for validating and activating the access policy."""

    @abstractmethod
    async def validate(self) -> None:
        """Dry-run check of the composed policy, without applying it.

        Raises:
            PolicyValidationError: If the policy is rejected.
        """
        ...

    @abstractmethod
    async def apply(self) -> None:
        """Restart the enforcing service so the policy takes effect.

        Raises:
            PolicyReloadError: If the service could not be restarted.
        """
        ...
