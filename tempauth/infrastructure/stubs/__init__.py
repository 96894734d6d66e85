"""In-memory stubs of the application ports.

Used by the unit tests and by the CLI tests, which swap the container's
adapters for these. NOT suitable for production use.
"""

from tempauth.infrastructure.stubs.account_directory_stub import AccountDirectoryStub
from tempauth.infrastructure.stubs.activity_log_stub import ActivityLogStub
from tempauth.infrastructure.stubs.artifact_toggle_stub import ArtifactToggleStub
from tempauth.infrastructure.stubs.failsafe_scheduler_stub import FailsafeSchedulerStub
from tempauth.infrastructure.stubs.policy_reloader_stub import PolicyReloaderStub
from tempauth.infrastructure.stubs.prerequisite_checker_stub import (
    PrerequisiteCheckerStub,
)
from tempauth.infrastructure.stubs.session_notifier_stub import SessionNotifierStub
from tempauth.infrastructure.stubs.terminal_control_stub import TerminalControlStub

__all__: list[str] = [
    "AccountDirectoryStub",
    "ActivityLogStub",
    "ArtifactToggleStub",
    "FailsafeSchedulerStub",
    "PolicyReloaderStub",
    "PrerequisiteCheckerStub",
    "SessionNotifierStub",
    "TerminalControlStub",
]
