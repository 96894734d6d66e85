"""sshd policy reloader.

validate() runs ``sshd -t``, which parses the main config and every file
pulled in through its Include directive, without touching the running
daemon. apply() restarts the daemon through systemd; established sessions
survive a restart.
"""

from __future__ import annotations

from tempauth.application.ports.policy_reloader import PolicyReloader
from tempauth.domain.errors.policy import PolicyReloadError, PolicyValidationError
from tempauth.infrastructure.command_runner import CommandRunner
from tempauth.infrastructure.observability.logging import get_logger_for_adapter


class SshdPolicyReloader(PolicyReloader):
    """Validates with ``sshd -t`` and applies with ``systemctl restart``."""

    def __init__(
        self,
        runner: CommandRunner,
        *,
        sshd_binary: str = "sshd",
        service: str = "sshd",
        systemctl_binary: str = "systemctl",
    ) -> None:
        self._runner = runner
        self._sshd = sshd_binary
        self._service = service
        self._systemctl = systemctl_binary
        self._log = get_logger_for_adapter("sshd_reloader")

    async def validate(self) -> None:
        result = await self._runner.run([self._sshd, "-t"])
        if not result.ok:
            self._log.error("policy_validation_failed", cmd=result.cmd, returncode=result.returncode)
            raise PolicyValidationError("sshd configuration is invalid", result.output)
        self._log.info("policy_validated", cmd=result.cmd)

    async def apply(self) -> None:
        result = await self._runner.run([self._systemctl, "restart", self._service])
        if not result.ok:
            self._log.error("policy_apply_failed", cmd=result.cmd, returncode=result.returncode)
            raise PolicyReloadError(f"Could not restart {self._service}", result.output)
        self._log.info("policy_applied", service=self._service)
