"""Domain errors for tempauth.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from TempAuthError.
"""

from tempauth.domain.errors.policy import (
    PolicyError,
    PolicyReloadError,
    PolicyValidationError,
)
from tempauth.domain.errors.prerequisite import (
    PrerequisiteError,
    RequestResolutionError,
)
from tempauth.domain.errors.saga import DisableAbortedError
from tempauth.domain.errors.scheduling import SchedulingError
from tempauth.domain.errors.toggle import (
    FactorStateMissingError,
    NotDisabledError,
    PolicyFragmentMissingError,
    StaleOverrideError,
    ToggleError,
)

__all__: list[str] = [
    "DisableAbortedError",
    "FactorStateMissingError",
    "NotDisabledError",
    "PolicyError",
    "PolicyFragmentMissingError",
    "PolicyReloadError",
    "PolicyValidationError",
    "PrerequisiteError",
    "RequestResolutionError",
    "SchedulingError",
    "StaleOverrideError",
    "ToggleError",
]
