"""Disable saga abort error.

Raised after the disable saga failed part-way and its compensation has
run. The original failure is chained as ``__cause__`` and kept on
``cause``; the failsafe job scheduled before the failure stays pending.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tempauth.domain.exceptions import TempAuthError

if TYPE_CHECKING:
    from tempauth.domain.models.failsafe_job import FailsafeJob
    from tempauth.domain.models.saga_report import SagaStep, StepFailure


class DisableAbortedError(TempAuthError):
    """Raised when the disable saga stopped and rolled back.

    Attributes:
        step: The step that failed.
        cause: The exception raised by that step.
        failsafe_job: The still-pending safety-net job.
        compensation_failures: Rollback steps that failed in turn.
    """

    def __init__(
        self,
        step: SagaStep,
        cause: Exception,
        failsafe_job: FailsafeJob,
        compensation_failures: tuple[StepFailure, ...] = (),
    ) -> None:
        message = f"Disable aborted at {step.value}: {cause}"
        if compensation_failures:
            failed = ", ".join(f.step.value for f in compensation_failures)
            message = f"{message} (rollback incomplete: {failed})"
        super().__init__(message)
        self.step = step
        self.cause = cause
        self.failsafe_job = failsafe_job
        self.compensation_failures = compensation_failures

    @property
    def rolled_back(self) -> bool:
        """True when every compensation step succeeded."""
        return not self.compensation_failures
