"""Production TimeAuthorityProtocol backed by the system clocks."""

import time
from datetime import datetime, timezone

from tempauth.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
