"""Failsafe scheduler port - out-of-process safety net.

The job must survive exit of this process and a reboot. Scheduling is the
first action of the disable saga; cancelling is the last action of the
restore saga and is only done once the account is confirmed enabled.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import timedelta

from tempauth.domain.models.failsafe_job import FailsafeJob


class FailsafeScheduler(ABC):
    """Abstract interface for the one-shot restore job."""

    @abstractmethod
    async def schedule(self, argv: Sequence[str], delay: timedelta) -> FailsafeJob:
        """Register a one-shot job running ``argv`` after ``delay``.

        Args:
            argv: Command to run; the tool's own restore entry point.
            delay: How long from now the job fires.

        Returns:
            Typed handle of the scheduled job.

        Raises:
            SchedulingError: If the job could not be registered.
        """
        ...

    @abstractmethod
    async def cancel(self, job: FailsafeJob) -> None:
        """Deregister a previously scheduled job.

        Raises:
            SchedulingError: If the job could not be removed.
        """
        ...
