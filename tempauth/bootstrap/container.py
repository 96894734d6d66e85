"""Dependency wiring for the CLI.

Builds the production adapters from a ToggleConfig and hands the CLI the
three things it needs: the prerequisite checker, the request resolver and
the orchestrator. Tests build a Container from stubs instead.
"""

from __future__ import annotations

from dataclasses import dataclass

from tempauth.application.ports.prerequisite_checker import PrerequisiteChecker
from tempauth.application.services.request_resolver_service import (
    RequestResolverService,
)
from tempauth.application.services.toggle_orchestrator_service import (
    ToggleOrchestratorService,
)
from tempauth.application.services.watchdog_service import WatchdogService
from tempauth.config.toggle_config import ToggleConfig
from tempauth.infrastructure.adapters import (
    AtFailsafeScheduler,
    AuthLogActivity,
    FilesystemArtifactToggle,
    PasswdAccountDirectory,
    SshdPolicyReloader,
    SystemPrerequisiteChecker,
    SystemTimeAuthority,
    TermiosTerminal,
    TtySessionNotifier,
)
from tempauth.infrastructure.command_runner import CommandRunner


@dataclass(frozen=True)
class Container:
    """Wired services for one CLI invocation."""

    config: ToggleConfig
    prerequisites: PrerequisiteChecker
    resolver: RequestResolverService
    orchestrator: ToggleOrchestratorService


def build_container(config: ToggleConfig) -> Container:
    """Wire the production adapters.

    Args:
        config: Resolved configuration, including any --window override.

    Returns:
        Container with production implementations of every port.
    """
    runner = CommandRunner()
    time_authority = SystemTimeAuthority()

    watchdog = WatchdogService(
        activity_log=AuthLogActivity(config.auth_log_path),
        time_authority=time_authority,
        terminal=TermiosTerminal(),
        poll_interval=float(config.poll_interval_seconds),
    )
    orchestrator = ToggleOrchestratorService(
        artifacts=FilesystemArtifactToggle(),
        reloader=SshdPolicyReloader(runner, service=config.sshd_service),
        scheduler=AtFailsafeScheduler(runner, time_authority),
        watchdog=watchdog,
        notifier=TtySessionNotifier(runner),
        config=config,
    )
    return Container(
        config=config,
        prerequisites=SystemPrerequisiteChecker(),
        resolver=RequestResolverService(config, PasswdAccountDirectory()),
        orchestrator=orchestrator,
    )
