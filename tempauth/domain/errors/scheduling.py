"""Failsafe scheduling errors.

Scheduling failure is fatal and happens before any artifact is touched.
Cancellation failure is only logged: the job is allowed to fire against
an already-restored account, where it does nothing.
"""

from tempauth.domain.exceptions import TempAuthError


class SchedulingError(TempAuthError):
    """Raised when a failsafe job cannot be created or cancelled."""

    def __init__(self, message: str, job_id: str = "") -> None:
        """Initialize with the job involved.

        Args:
            message: Error description.
            job_id: Scheduler job identifier, when one exists.
        """
        super().__init__(message)
        self.job_id = job_id
