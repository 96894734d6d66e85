"""Watchdog service - decides when the temporary exemption ends.

A single polling loop with three exit conditions, checked once per tick
in this order:

1. CONNECTED: a new-session record for the account was appended to the
   activity log after the snapshot taken before the loop started
2. TIMED_OUT: the window has elapsed
3. ABORTED: the cancellation token was set (SIGINT/SIGTERM)

Terminal echo is suppressed for the whole wait and restored on every
exit path. Detection latency is bounded by the poll interval.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from tempauth.application.ports.activity_log import ActivityLog
from tempauth.application.ports.terminal_control import TerminalControl
from tempauth.application.ports.time_authority import TimeAuthorityProtocol
from tempauth.application.services.base import LoggingMixin
from tempauth.domain.models.cancellation import CancellationToken
from tempauth.domain.models.override_request import OverrideRequest
from tempauth.domain.models.watchdog_outcome import WatchdogOutcome

SleepFn = Callable[[float], Awaitable[None]]
TickFn = Callable[[float], None]


class WatchdogService(LoggingMixin):
    """Waits for the account to connect, the window to pass, or an abort.

    Example:
        >>> watchdog = WatchdogService(activity_log, time_authority, terminal)
        >>> outcome = await watchdog.wait(request, 30, CancellationToken())
    """

    def __init__(
        self,
        activity_log: ActivityLog,
        time_authority: TimeAuthorityProtocol,
        terminal: TerminalControl,
        *,
        poll_interval: float = 1.0,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        """Initialize WatchdogService.

        Args:
            activity_log: Port for reading new-session records.
            time_authority: Port for measuring elapsed time.
            terminal: Port for echo suppression.
            poll_interval: Seconds between ticks.
            sleep: Awaitable sleep; tests inject one that advances fake time.
        """
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        self._activity_log = activity_log
        self._time = time_authority
        self._terminal = terminal
        self._poll_interval = poll_interval
        self._sleep = sleep
        self._init_logger()

    async def wait(
        self,
        request: OverrideRequest,
        window_seconds: float,
        cancellation: CancellationToken,
        on_tick: TickFn | None = None,
    ) -> WatchdogOutcome:
        """Block until one of the exit conditions holds.

        Args:
            request: The active override; only the account is used.
            window_seconds: Length of the exemption window.
            cancellation: Token checked at each tick.
            on_tick: Optional callback receiving the remaining seconds.

        Returns:
            The first exit condition that became true.
        """
        log = self._log_operation(
            "wait", account=request.account, window_seconds=window_seconds
        )

        # Snapshot before the loop so only records appended during the wait count
        offset = await self._activity_log.snapshot()
        started = self._time.monotonic()
        log.info("watchdog_started", log_offset=offset)

        with self._terminal.suppress_echo():
            while True:
                elapsed = self._time.monotonic() - started
                remaining = max(0.0, window_seconds - elapsed)
                if on_tick is not None:
                    on_tick(remaining)

                if await self._activity_log.has_session_since(request.account, offset):
                    outcome = WatchdogOutcome.CONNECTED
                    break

                if elapsed >= window_seconds:
                    outcome = WatchdogOutcome.TIMED_OUT
                    break

                if cancellation.is_cancelled:
                    outcome = WatchdogOutcome.ABORTED
                    break

                await self._sleep(self._poll_interval)

        log.info(
            "watchdog_finished",
            outcome=outcome.value,
            elapsed_seconds=round(self._time.monotonic() - started, 3),
            cancel_reason=cancellation.reason,
        )
        return outcome
