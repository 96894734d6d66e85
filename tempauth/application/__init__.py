"""
Application layer - Sagas and the watchdog for the second-factor toggle.

This layer contains:
- Port definitions (abstract interfaces for infrastructure)
- Application services (request resolution, watchdog, orchestrator)

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, bootstrap, cli
"""
