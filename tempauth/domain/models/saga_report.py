"""Result models for the disable and restore sagas.

The restore saga never stops at the first failure, so its result is a
report of every step that went wrong plus the state it left behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tempauth.domain.models.failsafe_job import FailsafeJob
from tempauth.domain.models.toggle_state import ToggleState
from tempauth.domain.models.watchdog_outcome import WatchdogOutcome


class SagaStep(Enum):
    """Individual steps of the two sagas."""

    SCHEDULE_FAILSAFE = "schedule_failsafe"
    APPLY_FACTOR_OVERRIDE = "apply_factor_override"
    WRITE_POLICY_FRAGMENT = "write_policy_fragment"
    ACTIVATE_POLICY = "activate_policy"
    REVERT_FACTOR_OVERRIDE = "revert_factor_override"
    REMOVE_POLICY_FRAGMENT = "remove_policy_fragment"
    CANCEL_FAILSAFE = "cancel_failsafe"


@dataclass(frozen=True, eq=True)
class StepFailure:
    """A saga step that raised.

    Attributes:
        step: Which step failed.
        error_type: Class name of the exception.
        message: The exception message.
    """

    step: SagaStep
    error_type: str
    message: str

    @classmethod
    def from_exception(cls, step: SagaStep, error: Exception) -> StepFailure:
        return cls(step=step, error_type=type(error).__name__, message=str(error))

    def to_dict(self) -> dict[str, str]:
        return {
            "step": self.step.value,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(frozen=True, eq=True)
class RestoreReport:
    """Outcome of the restore saga.

    Attributes:
        account: The restored account.
        failures: Restoration steps that failed, in execution order.
        final_state: State observed after all steps ran.
        failsafe_cancelled: True/False if a failsafe job was to be
            cancelled, None when there was no job (standalone restore) or
            the job was kept because the account is not yet enabled.
    """

    account: str
    failures: tuple[StepFailure, ...] = field(default_factory=tuple)
    final_state: ToggleState = ToggleState.ENABLED
    failsafe_cancelled: bool | None = None

    @property
    def is_confirmed(self) -> bool:
        """True when every restore step succeeded and the account is enabled.

        Failsafe cancellation does not count: a job left behind fires
        harmlessly.
        """
        restore_failures = [
            f for f in self.failures if f.step != SagaStep.CANCEL_FAILSAFE
        ]
        return not restore_failures and self.final_state == ToggleState.ENABLED

    def to_dict(self) -> dict[str, Any]:
        return {
            "account": self.account,
            "failures": [f.to_dict() for f in self.failures],
            "final_state": self.final_state.value,
            "failsafe_cancelled": self.failsafe_cancelled,
            "confirmed": self.is_confirmed,
        }


@dataclass(frozen=True, eq=True)
class DisableReport:
    """Outcome of a complete disable-wait-restore run.

    Attributes:
        account: The account that was temporarily exempted.
        failsafe_job: The safety-net job scheduled before any change.
        watchdog_outcome: Why the wait ended.
        restore: Report of the restore saga that followed.
    """

    account: str
    failsafe_job: FailsafeJob
    watchdog_outcome: WatchdogOutcome
    restore: RestoreReport

    def to_dict(self) -> dict[str, Any]:
        return {
            "account": self.account,
            "failsafe_job": self.failsafe_job.to_dict(),
            "watchdog_outcome": self.watchdog_outcome.value,
            "restore": self.restore.to_dict(),
        }
