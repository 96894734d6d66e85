"""Time Authority Protocol - interface for wall-clock and elapsed time.

Services that need the current time or need to measure elapsed time MUST
inject a TimeAuthorityProtocol implementation instead of calling
datetime.now() or time.monotonic() directly.

Benefits:
1. **Testability**: Tests inject FakeTimeAuthority and drive the watchdog
   through a whole window without sleeping
2. **Consistency**: Failsafe fire times and watchdog deadlines come from a
   single source
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    For production:
        Use SystemTimeAuthority from tempauth/infrastructure/adapters/

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness (UTC)."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Returns:
            Monotonically increasing float value (in seconds).

        Note:
            Use this for measuring elapsed time, not for timestamps.
            The reference point is arbitrary - only differences are meaningful.
        """
        ...
