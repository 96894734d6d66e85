"""Failsafe scheduler backed by at(1).

at jobs are spooled to disk by atd, so they survive both the exit of this
process and a reboot. at prints the new job's id as free text on stderr
("job 12 at Mon Oct 19 10:31:00 2026"); it is parsed here, once, into a
FailsafeJob so nothing above this adapter deals with at's output.
"""

from __future__ import annotations

import math
import re
import shlex
from collections.abc import Sequence
from datetime import timedelta

from tempauth.application.ports.failsafe_scheduler import FailsafeScheduler
from tempauth.application.ports.time_authority import TimeAuthorityProtocol
from tempauth.domain.errors.scheduling import SchedulingError
from tempauth.domain.models.failsafe_job import FailsafeJob
from tempauth.infrastructure.command_runner import CommandRunner
from tempauth.infrastructure.observability.logging import get_logger_for_adapter

_JOB_ID_PATTERN = re.compile(r"^job (\d+) at ", re.MULTILINE)


def parse_job_id(output: str) -> str | None:
    """Extract the job id from at's confirmation line."""
    match = _JOB_ID_PATTERN.search(output)
    return match.group(1) if match else None


class AtFailsafeScheduler(FailsafeScheduler):
    """Schedules the restore entry point with ``at now + N minutes``."""

    def __init__(
        self,
        runner: CommandRunner,
        time_authority: TimeAuthorityProtocol,
        *,
        at_binary: str = "at",
        atrm_binary: str = "atrm",
    ) -> None:
        self._runner = runner
        self._time = time_authority
        self._at = at_binary
        self._atrm = atrm_binary
        self._log = get_logger_for_adapter("at_scheduler")

    async def schedule(self, argv: Sequence[str], delay: timedelta) -> FailsafeJob:
        # at has minute resolution; round up so the job never fires early
        minutes = max(1, math.ceil(delay.total_seconds() / 60))
        command = shlex.join(argv)

        result = await self._runner.run(
            [self._at, "now", "+", str(minutes), "minutes"],
            input_text=command + "\n",
        )
        if not result.ok:
            self._log.error("failsafe_schedule_rejected", returncode=result.returncode, output=result.output)
            raise SchedulingError(f"at refused the failsafe job: {result.output}")

        job_id = parse_job_id(result.stderr) or parse_job_id(result.stdout)
        if job_id is None:
            self._log.error("failsafe_job_id_missing", output=result.output)
            raise SchedulingError(f"Could not read the job id from at output: {result.output!r}")

        job = FailsafeJob(
            job_id=job_id,
            fire_at=self._time.now() + timedelta(minutes=minutes),
            command=command,
        )
        self._log.info("failsafe_job_created", **job.to_dict())
        return job

    async def cancel(self, job: FailsafeJob) -> None:
        result = await self._runner.run([self._atrm, job.job_id])
        if not result.ok:
            raise SchedulingError(
                f"Could not remove failsafe job {job.job_id}: {result.output}",
                job_id=job.job_id,
            )
        self._log.info("failsafe_job_removed", job_id=job.job_id)
