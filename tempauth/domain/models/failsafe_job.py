"""Failsafe job domain model.

The job itself is owned by the OS scheduler. The core only keeps this
handle so it can cancel the job once the account is confirmed restored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True, eq=True)
class FailsafeJob:
    """Handle to a scheduled one-shot restore job.

    Attributes:
        job_id: Identifier assigned by the scheduler.
        fire_at: When the job will run (timezone-aware).
        command: The shell command line the job executes.
    """

    job_id: str
    fire_at: datetime
    command: str

    def __post_init__(self) -> None:
        """Validate failsafe job fields."""
        if not self.job_id:
            raise ValueError("job_id cannot be empty")
        if not self.command:
            raise ValueError("command cannot be empty")
        if self.fire_at.tzinfo is None:
            raise ValueError("fire_at must be timezone-aware")

    def to_dict(self) -> dict[str, Any]:
        """Serialize job to dictionary for log context."""
        return {
            "job_id": self.job_id,
            "fire_at": self.fire_at.isoformat(),
            "command": self.command,
        }
