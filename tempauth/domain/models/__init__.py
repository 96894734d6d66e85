"""Domain models for tempauth."""

from tempauth.domain.models.cancellation import CancellationToken
from tempauth.domain.models.failsafe_job import FailsafeJob
from tempauth.domain.models.override_request import (
    DISABLED_SUFFIX,
    OverrideRequest,
    ToggleMode,
)
from tempauth.domain.models.saga_report import (
    DisableReport,
    RestoreReport,
    SagaStep,
    StepFailure,
)
from tempauth.domain.models.toggle_state import ToggleState
from tempauth.domain.models.watchdog_outcome import WatchdogOutcome

__all__: list[str] = [
    "DISABLED_SUFFIX",
    "CancellationToken",
    "DisableReport",
    "FailsafeJob",
    "OverrideRequest",
    "RestoreReport",
    "SagaStep",
    "StepFailure",
    "ToggleMode",
    "ToggleState",
    "WatchdogOutcome",
]
