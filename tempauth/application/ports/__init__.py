"""Application ports - Abstract interfaces for infrastructure adapters.

Each port has a real adapter in tempauth.infrastructure.adapters and an
in-memory stub in tempauth.infrastructure.stubs.
"""

from tempauth.application.ports.account_directory import AccountDirectory
from tempauth.application.ports.activity_log import ActivityLog
from tempauth.application.ports.artifact_toggle import ArtifactToggle
from tempauth.application.ports.failsafe_scheduler import FailsafeScheduler
from tempauth.application.ports.policy_reloader import PolicyReloader
from tempauth.application.ports.prerequisite_checker import PrerequisiteChecker
from tempauth.application.ports.session_notifier import SessionNotifier
from tempauth.application.ports.terminal_control import TerminalControl
from tempauth.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AccountDirectory",
    "ActivityLog",
    "ArtifactToggle",
    "FailsafeScheduler",
    "PolicyReloader",
    "PrerequisiteChecker",
    "SessionNotifier",
    "TerminalControl",
    "TimeAuthorityProtocol",
]
