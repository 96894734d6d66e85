"""Application services for tempauth."""

from tempauth.application.services.request_resolver_service import (
    RequestResolverService,
)
from tempauth.application.services.toggle_orchestrator_service import (
    DISABLED_NOTICE,
    RESTORE_WARNING,
    RESTORED_NOTICE,
    ToggleOrchestratorService,
)
from tempauth.application.services.watchdog_service import WatchdogService

__all__: list[str] = [
    "DISABLED_NOTICE",
    "RESTORED_NOTICE",
    "RESTORE_WARNING",
    "RequestResolverService",
    "ToggleOrchestratorService",
    "WatchdogService",
]
