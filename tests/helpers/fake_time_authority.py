"""FakeTimeAuthority - Controllable time authority for deterministic tests.

Time-dependent code (the watchdog deadline, failsafe fire times) takes a
TimeAuthorityProtocol. Tests inject this fake and move time forward
explicitly, so a whole exemption window runs without sleeping.

Usage Patterns:
--------------

1. Frozen Time Pattern:

    >>> fake_time = FakeTimeAuthority(frozen_at=datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc))
    >>> assert fake_time.now() == datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

2. Time Advancement Pattern:

    >>> fake_time = FakeTimeAuthority()
    >>> fake_time.advance(seconds=30)
    >>> assert fake_time.monotonic() == 30.0

3. Sleep Pattern (watchdog):

    >>> watchdog = WatchdogService(log, fake_time, terminal, sleep=fake_time.sleep)
    >>> # each tick advances fake time instead of blocking
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tempauth.application.ports.time_authority import TimeAuthorityProtocol


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Controllable time authority for deterministic tests.

    Attributes:
        sleeps: Durations passed to sleep(), in call order.
    """

    def __init__(
        self,
        frozen_at: datetime | None = None,
        *,
        start_monotonic: float = 0.0,
    ) -> None:
        """Initialize the fake time authority.

        Args:
            frozen_at: Optional datetime to freeze time at. If not provided,
                defaults to 2026-01-01T00:00:00 UTC for predictable tests.
            start_monotonic: Starting value for monotonic clock. Defaults to 0.0.

        Note:
            If frozen_at is timezone-naive, UTC is assumed.
        """
        if frozen_at is None:
            frozen_at = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

        if frozen_at.tzinfo is None:
            frozen_at = frozen_at.replace(tzinfo=timezone.utc)

        self._current_time: datetime = frozen_at
        self._monotonic_base: float = start_monotonic
        self._monotonic_advances: float = 0.0
        self.sleeps: list[float] = []

    # =========================================================================
    # TimeAuthorityProtocol Implementation
    # =========================================================================

    def now(self) -> datetime:
        return self._current_time

    def monotonic(self) -> float:
        return self._monotonic_base + self._monotonic_advances

    # =========================================================================
    # Test Control Methods
    # =========================================================================

    def advance(
        self,
        seconds: float | int | None = None,
        delta: timedelta | None = None,
    ) -> None:
        """Advance time by the specified amount.

        Args:
            seconds: Number of seconds to advance (int or float).
            delta: A timedelta to advance by. Takes precedence over seconds.

        Raises:
            ValueError: If neither seconds nor delta is provided.
            ValueError: If attempting to advance by negative time.
        """
        if delta is not None:
            advance_seconds = delta.total_seconds()
        elif seconds is not None:
            advance_seconds = float(seconds)
        else:
            raise ValueError("Must provide either 'seconds' or 'delta' argument")

        if advance_seconds < 0:
            raise ValueError(
                f"Cannot advance time backwards. Got {advance_seconds} seconds. "
                "Use set_time() for explicit time changes."
            )

        self._current_time += timedelta(seconds=advance_seconds)
        self._monotonic_advances += advance_seconds

    def set_time(self, dt: datetime) -> None:
        """Set the wall clock to an explicit value; monotonic is unaffected."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        self._current_time = dt

    async def sleep(self, seconds: float) -> None:
        """Drop-in for asyncio.sleep that advances time instead of blocking."""
        self.sleeps.append(seconds)
        self.advance(seconds=seconds)

    @property
    def elapsed_monotonic(self) -> float:
        return self._monotonic_advances

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"FakeTimeAuthority("
            f"current_time={self._current_time.isoformat()}, "
            f"monotonic={self.monotonic():.3f})"
        )
