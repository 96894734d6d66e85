"""Unit tests for WatchdogService.

The watchdog is driven by FakeTimeAuthority.sleep, so each tick advances
fake time by the poll interval instead of blocking.
"""

from __future__ import annotations

import pytest

from tempauth.application.services.watchdog_service import WatchdogService
from tempauth.domain.models.cancellation import CancellationToken
from tempauth.domain.models.override_request import OverrideRequest
from tempauth.domain.models.watchdog_outcome import WatchdogOutcome
from tempauth.infrastructure.stubs import ActivityLogStub, TerminalControlStub
from tests.helpers import FakeTimeAuthority


@pytest.fixture
def activity_log() -> ActivityLogStub:
    return ActivityLogStub()


@pytest.fixture
def terminal() -> TerminalControlStub:
    return TerminalControlStub()


@pytest.fixture
def watchdog(
    activity_log: ActivityLogStub,
    fake_time_authority: FakeTimeAuthority,
    terminal: TerminalControlStub,
) -> WatchdogService:
    return WatchdogService(
        activity_log,
        fake_time_authority,
        terminal,
        poll_interval=1.0,
        sleep=fake_time_authority.sleep,
    )


class TestOutcomes:
    """Tests for the three exit conditions."""

    @pytest.mark.asyncio
    async def test_times_out_after_window(
        self,
        watchdog: WatchdogService,
        disable_request: OverrideRequest,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        outcome = await watchdog.wait(disable_request, 10, CancellationToken())

        assert outcome == WatchdogOutcome.TIMED_OUT
        assert fake_time_authority.elapsed_monotonic == 10.0
        assert fake_time_authority.sleeps == [1.0] * 10

    @pytest.mark.asyncio
    async def test_connected_when_session_appears(
        self,
        activity_log: ActivityLogStub,
        fake_time_authority: FakeTimeAuthority,
        terminal: TerminalControlStub,
        disable_request: OverrideRequest,
    ) -> None:
        """A session record appended at t=5 ends a 30s window well before the deadline."""

        async def sleep(seconds: float) -> None:
            await fake_time_authority.sleep(seconds)
            if fake_time_authority.monotonic() == 5.0:
                activity_log.append_session("alice")

        watchdog = WatchdogService(
            activity_log, fake_time_authority, terminal, sleep=sleep
        )

        outcome = await watchdog.wait(disable_request, 30, CancellationToken())

        assert outcome == WatchdogOutcome.CONNECTED
        assert fake_time_authority.elapsed_monotonic == 5.0

    @pytest.mark.asyncio
    async def test_aborted_when_cancelled(
        self,
        activity_log: ActivityLogStub,
        fake_time_authority: FakeTimeAuthority,
        terminal: TerminalControlStub,
        disable_request: OverrideRequest,
    ) -> None:
        token = CancellationToken()

        async def sleep(seconds: float) -> None:
            await fake_time_authority.sleep(seconds)
            if fake_time_authority.monotonic() == 3.0:
                token.cancel("SIGINT")

        watchdog = WatchdogService(
            activity_log, fake_time_authority, terminal, sleep=sleep
        )

        outcome = await watchdog.wait(disable_request, 30, token)

        assert outcome == WatchdogOutcome.ABORTED
        assert fake_time_authority.elapsed_monotonic == 3.0

    @pytest.mark.asyncio
    async def test_already_cancelled_returns_without_sleeping(
        self,
        watchdog: WatchdogService,
        disable_request: OverrideRequest,
        fake_time_authority: FakeTimeAuthority,
    ) -> None:
        token = CancellationToken()
        token.cancel("SIGTERM")

        outcome = await watchdog.wait(disable_request, 30, token)

        assert outcome == WatchdogOutcome.ABORTED
        assert fake_time_authority.sleeps == []


class TestSnapshot:
    """Only records appended after the snapshot count."""

    @pytest.mark.asyncio
    async def test_earlier_session_is_ignored(
        self,
        watchdog: WatchdogService,
        activity_log: ActivityLogStub,
        disable_request: OverrideRequest,
    ) -> None:
        activity_log.append_session("alice")

        outcome = await watchdog.wait(disable_request, 3, CancellationToken())

        assert outcome == WatchdogOutcome.TIMED_OUT

    @pytest.mark.asyncio
    async def test_other_accounts_are_ignored(
        self,
        activity_log: ActivityLogStub,
        fake_time_authority: FakeTimeAuthority,
        terminal: TerminalControlStub,
        disable_request: OverrideRequest,
    ) -> None:
        async def sleep(seconds: float) -> None:
            await fake_time_authority.sleep(seconds)
            activity_log.append_session("bob")
            activity_log.append_noise("alice")

        watchdog = WatchdogService(
            activity_log, fake_time_authority, terminal, sleep=sleep
        )

        outcome = await watchdog.wait(disable_request, 3, CancellationToken())

        assert outcome == WatchdogOutcome.TIMED_OUT

    @pytest.mark.asyncio
    async def test_connection_wins_over_timeout_on_same_tick(
        self,
        activity_log: ActivityLogStub,
        fake_time_authority: FakeTimeAuthority,
        terminal: TerminalControlStub,
        disable_request: OverrideRequest,
    ) -> None:
        async def sleep(seconds: float) -> None:
            await fake_time_authority.sleep(seconds)
            if fake_time_authority.monotonic() == 2.0:
                activity_log.append_session("alice")

        watchdog = WatchdogService(
            activity_log, fake_time_authority, terminal, sleep=sleep
        )

        outcome = await watchdog.wait(disable_request, 2, CancellationToken())

        assert outcome == WatchdogOutcome.CONNECTED


class TestTerminalAndProgress:
    @pytest.mark.asyncio
    async def test_echo_suppressed_during_wait_and_restored(
        self,
        activity_log: ActivityLogStub,
        fake_time_authority: FakeTimeAuthority,
        terminal: TerminalControlStub,
        disable_request: OverrideRequest,
    ) -> None:
        seen: list[bool] = []

        async def sleep(seconds: float) -> None:
            seen.append(terminal.echo_suppressed)
            await fake_time_authority.sleep(seconds)

        watchdog = WatchdogService(
            activity_log, fake_time_authority, terminal, sleep=sleep
        )

        await watchdog.wait(disable_request, 2, CancellationToken())

        assert seen == [True, True]
        assert terminal.entered == terminal.exited == 1
        assert not terminal.echo_suppressed

    @pytest.mark.asyncio
    async def test_echo_restored_when_log_read_fails(
        self,
        activity_log: ActivityLogStub,
        fake_time_authority: FakeTimeAuthority,
        terminal: TerminalControlStub,
        disable_request: OverrideRequest,
    ) -> None:
        async def broken(account: str, offset: int) -> bool:
            raise OSError("log unreadable")

        activity_log.has_session_since = broken  # type: ignore[method-assign]
        watchdog = WatchdogService(
            activity_log, fake_time_authority, terminal, sleep=fake_time_authority.sleep
        )

        with pytest.raises(OSError):
            await watchdog.wait(disable_request, 5, CancellationToken())

        assert not terminal.echo_suppressed

    @pytest.mark.asyncio
    async def test_on_tick_counts_down(
        self,
        watchdog: WatchdogService,
        disable_request: OverrideRequest,
    ) -> None:
        ticks: list[float] = []

        await watchdog.wait(disable_request, 3, CancellationToken(), on_tick=ticks.append)

        assert ticks == [3.0, 2.0, 1.0, 0.0]

    def test_rejects_non_positive_poll_interval(
        self,
        activity_log: ActivityLogStub,
        fake_time_authority: FakeTimeAuthority,
        terminal: TerminalControlStub,
    ) -> None:
        with pytest.raises(ValueError, match="poll_interval"):
            WatchdogService(activity_log, fake_time_authority, terminal, poll_interval=0)
