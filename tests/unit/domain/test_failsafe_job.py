"""Unit tests for the FailsafeJob domain model."""

from datetime import datetime, timezone

import pytest

from tempauth.domain.models.failsafe_job import FailsafeJob

FIRE_AT = datetime(2026, 1, 1, 0, 2, 0, tzinfo=timezone.utc)


class TestFailsafeJob:
    def test_valid_job(self) -> None:
        job = FailsafeJob(job_id="12", fire_at=FIRE_AT, command="tempauth restore alice")
        assert job.job_id == "12"

    def test_empty_job_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="job_id"):
            FailsafeJob(job_id="", fire_at=FIRE_AT, command="tempauth restore alice")

    def test_empty_command_rejected(self) -> None:
        with pytest.raises(ValueError, match="command"):
            FailsafeJob(job_id="12", fire_at=FIRE_AT, command="")

    def test_naive_fire_at_rejected(self) -> None:
        with pytest.raises(ValueError, match="timezone-aware"):
            FailsafeJob(
                job_id="12",
                fire_at=datetime(2026, 1, 1, 0, 2, 0),
                command="tempauth restore alice",
            )

    def test_to_dict(self) -> None:
        job = FailsafeJob(job_id="12", fire_at=FIRE_AT, command="tempauth restore alice")
        assert job.to_dict() == {
            "job_id": "12",
            "fire_at": "2026-01-01T00:02:00+00:00",
            "command": "tempauth restore alice",
        }
