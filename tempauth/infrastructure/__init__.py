"""
Infrastructure layer - Host adapters for tempauth.

This layer contains:
- Filesystem, sshd, at(1), auth.log, tty and termios adapters
- In-memory stubs of every port for tests
- structlog configuration

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""
