"""
Domain layer - Pure model of the second-factor toggle.

This layer contains:
- Value objects (OverrideRequest, FailsafeJob, saga reports)
- Derived state (ToggleState) and the watchdog outcome
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure,
bootstrap or the CLI. Only stdlib and typing imports are allowed.
"""

from tempauth.domain.exceptions import TempAuthError

__all__: list[str] = ["TempAuthError"]
