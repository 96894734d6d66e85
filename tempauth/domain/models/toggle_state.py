"""Toggle state, derived from the two on-disk artifacts.

State is never stored. It is a function of two observables:

    suffixed factor file | policy fragment | state
    ---------------------+-----------------+-------------
    absent               | absent          | ENABLED
    present              | present         | DISABLED
    present              | absent          | INCONSISTENT
    absent               | present         | INCONSISTENT

INCONSISTENT is a partial-failure state and must never be left standing
without a pending failsafe job or an attempted compensating restore.
"""

from enum import Enum


class ToggleState(Enum):
    """Second-factor state of one account."""

    ENABLED = "enabled"
    DISABLED = "disabled"
    INCONSISTENT = "inconsistent"

    @classmethod
    def from_artifacts(cls, override_present: bool, fragment_present: bool) -> "ToggleState":
        """Derive the state from artifact presence.

        Args:
            override_present: Whether the suffixed factor-state file exists.
            fragment_present: Whether the policy fragment exists.

        Returns:
            The derived ToggleState.
        """
        if override_present and fragment_present:
            return cls.DISABLED
        if not override_present and not fragment_present:
            return cls.ENABLED
        return cls.INCONSISTENT
