"""In-memory stub of FailsafeScheduler.

NOT suitable for production use.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from tempauth.application.ports.failsafe_scheduler import FailsafeScheduler
from tempauth.domain.errors.scheduling import SchedulingError
from tempauth.domain.models.failsafe_job import FailsafeJob


class FailsafeSchedulerStub(FailsafeScheduler):
    """Keeps scheduled jobs in a dict.

    Attributes:
        pending: job_id -> FailsafeJob still scheduled.
        cancelled: Jobs removed through cancel().
        schedule_error: Raised by schedule() when set.
        cancel_error: Raised by cancel() when set.
    """

    def __init__(self, base_time: datetime | None = None) -> None:
        self._base_time = base_time or datetime(2026, 1, 1, tzinfo=timezone.utc)
        self._next_id = 1
        self.pending: dict[str, FailsafeJob] = {}
        self.cancelled: list[FailsafeJob] = []
        self.schedule_error: SchedulingError | None = None
        self.cancel_error: SchedulingError | None = None

    async def schedule(self, argv: Sequence[str], delay: timedelta) -> FailsafeJob:
        if self.schedule_error is not None:
            raise self.schedule_error
        job = FailsafeJob(
            job_id=str(self._next_id),
            fire_at=self._base_time + delay,
            command=shlex.join(argv),
        )
        self._next_id += 1
        self.pending[job.job_id] = job
        return job

    async def cancel(self, job: FailsafeJob) -> None:
        if self.cancel_error is not None:
            raise self.cancel_error
        if job.job_id not in self.pending:
            raise SchedulingError(f"No such job {job.job_id}", job_id=job.job_id)
        del self.pending[job.job_id]
        self.cancelled.append(job)
