"""Adapters implementing the application ports against the host system."""

from tempauth.infrastructure.adapters.at_failsafe_scheduler import AtFailsafeScheduler
from tempauth.infrastructure.adapters.auth_log_activity import AuthLogActivity
from tempauth.infrastructure.adapters.filesystem_artifact_toggle import (
    FilesystemArtifactToggle,
)
from tempauth.infrastructure.adapters.passwd_account_directory import (
    PasswdAccountDirectory,
)
from tempauth.infrastructure.adapters.sshd_policy_reloader import SshdPolicyReloader
from tempauth.infrastructure.adapters.system_prerequisites import (
    SystemPrerequisiteChecker,
)
from tempauth.infrastructure.adapters.system_time_authority import SystemTimeAuthority
from tempauth.infrastructure.adapters.termios_terminal import TermiosTerminal
from tempauth.infrastructure.adapters.tty_session_notifier import TtySessionNotifier

__all__: list[str] = [
    "AtFailsafeScheduler",
    "AuthLogActivity",
    "FilesystemArtifactToggle",
    "PasswdAccountDirectory",
    "SshdPolicyReloader",
    "SystemPrerequisiteChecker",
    "SystemTimeAuthority",
    "TermiosTerminal",
    "TtySessionNotifier",
]
