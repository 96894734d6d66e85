"""ToggleOrchestratorService - the disable and restore sagas.

Disable saga (fail-fast, compensating):
    1. Schedule the failsafe job. Nothing is touched if this fails.
    2. Rename the factor-state file aside.
    3. Write the policy fragment (on failure: revert step 2).
    4. Validate + apply the policy (on failure: revert steps 2 and 3).
    5. Broadcast the "disabled" notice and run the watchdog.
    6. Run the restore saga, whatever the watchdog outcome. A watchdog
       that raises counts as the FAILED outcome.

Restore saga (best-effort, accumulating):
    1. Rename the factor-state file back.
    2. Remove the policy fragment.
    3. Validate + apply the policy.
    Every step runs even if an earlier one failed. Afterwards the account
    is checked; the account's sessions get either the success notice or a
    warning to verify connectivity by hand. The failsafe job is cancelled
    only once the account is confirmed enabled.

Restore entry point (operator, or the fired failsafe job):
    Refuses with NotDisabledError when the account is already enabled and
    touches nothing. This is what makes a late failsafe job harmless.

Usage:
    service = ToggleOrchestratorService(
        artifacts=artifacts,
        reloader=reloader,
        scheduler=scheduler,
        watchdog=watchdog,
        notifier=notifier,
        config=config,
    )

    report = await service.disable(request, CancellationToken())
    report = await service.restore(request)
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, NoReturn

from tempauth.application.services.base import LoggingMixin
from tempauth.domain.errors.policy import PolicyError, PolicyReloadError
from tempauth.domain.errors.saga import DisableAbortedError
from tempauth.domain.errors.scheduling import SchedulingError
from tempauth.domain.errors.toggle import NotDisabledError, ToggleError
from tempauth.domain.models.override_request import OverrideRequest, ToggleMode
from tempauth.domain.models.saga_report import (
    DisableReport,
    RestoreReport,
    SagaStep,
    StepFailure,
)
from tempauth.domain.models.toggle_state import ToggleState
from tempauth.domain.models.watchdog_outcome import WatchdogOutcome

if TYPE_CHECKING:
    from tempauth.application.ports.artifact_toggle import ArtifactToggle
    from tempauth.application.ports.failsafe_scheduler import FailsafeScheduler
    from tempauth.application.ports.policy_reloader import PolicyReloader
    from tempauth.application.ports.session_notifier import SessionNotifier
    from tempauth.application.services.watchdog_service import TickFn, WatchdogService
    from tempauth.config.toggle_config import ToggleConfig
    from tempauth.domain.models.cancellation import CancellationToken
    from tempauth.domain.models.failsafe_job import FailsafeJob

DISABLED_NOTICE = (
    "Two-Factor Authentication (2FA) has been temporarily disabled for your account."
)
RESTORED_NOTICE = "Two-Factor Authentication (2FA) has been restored for your account."
RESTORE_WARNING = (
    "WARNING: Something went wrong while restoring 2FA for your account.\n"
    "Make sure you can still connect to the server before closing this connection."
)


class ToggleOrchestratorService(LoggingMixin):
    """Sequences the artifact toggle, policy reloader, scheduler and watchdog."""

    def __init__(
        self,
        artifacts: ArtifactToggle,
        reloader: PolicyReloader,
        scheduler: FailsafeScheduler,
        watchdog: WatchdogService,
        notifier: SessionNotifier,
        config: ToggleConfig,
    ) -> None:
        """Initialize ToggleOrchestratorService.

        Args:
            artifacts: Port for the two on-disk artifacts.
            reloader: Port for validating and activating the policy.
            scheduler: Port for the out-of-process failsafe job.
            watchdog: Service deciding when the window ends.
            notifier: Port for messages to the account's sessions.
            config: Window and failsafe configuration.
        """
        self._artifacts = artifacts
        self._reloader = reloader
        self._scheduler = scheduler
        self._watchdog = watchdog
        self._notifier = notifier
        self._config = config
        self._init_logger()

    async def disable(
        self,
        request: OverrideRequest,
        cancellation: CancellationToken,
        *,
        window_seconds: int | None = None,
        on_tick: TickFn | None = None,
    ) -> DisableReport:
        """Disable 2FA for the account, wait, then restore it.

        Args:
            request: A DISABLE request.
            cancellation: Token that ends the wait early.
            window_seconds: Override of the configured window.
            on_tick: Optional progress callback passed to the watchdog.

        Returns:
            DisableReport with the failsafe job, watchdog outcome and the
            restore report.

        Raises:
            ValueError: If the request is not a DISABLE request or the
                window is out of bounds.
            SchedulingError: If the failsafe job could not be scheduled.
                Nothing was changed.
            DisableAbortedError: If a later step failed. Completed steps
                have been compensated and the failsafe job stays pending.
        """
        if request.mode != ToggleMode.DISABLE:
            raise ValueError(f"disable() needs a DISABLE request, got {request.mode.value}")

        window = self._config.window_seconds if window_seconds is None else window_seconds
        # Validates the window too; the job must outlive whatever is waited for
        failsafe_delay = self._config.failsafe_delay_for(window)
        log = self._log_operation("disable", account=request.account)
        log.info("disable_started", address=request.address, window_seconds=window)

        # Safety net first: without it a crash here would leave the account exempt
        try:
            job = await self._scheduler.schedule(
                self._config.restore_argv_for(request.account),
                failsafe_delay,
            )
        except SchedulingError:
            log.error("failsafe_schedule_failed", step=SagaStep.SCHEDULE_FAILSAFE.value)
            raise
        log.info("failsafe_scheduled", **job.to_dict())

        try:
            await self._artifacts.apply_factor_override(request)
        except ToggleError as e:
            # Nothing changed yet; the failsafe job is left to fire harmlessly
            await self._abort(request, SagaStep.APPLY_FACTOR_OVERRIDE, e, job, ())

        try:
            await self._artifacts.write_policy_fragment(request)
        except ToggleError as e:
            await self._abort(
                request,
                SagaStep.WRITE_POLICY_FRAGMENT,
                e,
                job,
                (SagaStep.REVERT_FACTOR_OVERRIDE,),
            )

        try:
            await self._activate_policy()
        except PolicyError as e:
            await self._abort(
                request,
                SagaStep.ACTIVATE_POLICY,
                e,
                job,
                (SagaStep.REVERT_FACTOR_OVERRIDE, SagaStep.REMOVE_POLICY_FRAGMENT),
                reactivate=isinstance(e, PolicyReloadError),
            )

        log.info("factor_disabled")
        await self._broadcast(request.account, DISABLED_NOTICE)

        try:
            outcome = await self._watchdog.wait(request, window, cancellation, on_tick)
        except Exception as e:
            # The exemption is live: restore now rather than leave it to the failsafe job
            log.error("watchdog_failed", error=str(e), exc_info=True)
            outcome = WatchdogOutcome.FAILED
        except asyncio.CancelledError:
            log.warning("disable_cancelled")
            await self._restore_saga(request, job)
            raise

        restore = await self._restore_saga(request, job)
        report = DisableReport(
            account=request.account,
            failsafe_job=job,
            watchdog_outcome=outcome,
            restore=restore,
        )
        log.info("disable_finished", **report.to_dict())
        return report

    async def restore(self, request: OverrideRequest) -> RestoreReport:
        """Standalone restore entry point.

        Args:
            request: The account's request; the address is not needed.

        Returns:
            RestoreReport of the best-effort restore saga.

        Raises:
            NotDisabledError: If the account is already enabled. Nothing
                is touched in that case.
        """
        log = self._log_operation("restore", account=request.account)
        state = await self._artifacts.state(request)
        if state == ToggleState.ENABLED:
            log.info("restore_skipped", reason="not_disabled")
            raise NotDisabledError(account=request.account)

        log.info("restore_started", state=state.value)
        return await self._restore_saga(request, failsafe_job=None)

    async def _restore_saga(
        self,
        request: OverrideRequest,
        failsafe_job: FailsafeJob | None,
    ) -> RestoreReport:
        log = self._log_operation("restore_saga", account=request.account)

        steps: tuple[tuple[SagaStep, Callable[[], Awaitable[None]]], ...] = (
            (
                SagaStep.REVERT_FACTOR_OVERRIDE,
                lambda: self._artifacts.revert_factor_override(request),
            ),
            (
                SagaStep.REMOVE_POLICY_FRAGMENT,
                lambda: self._artifacts.remove_policy_fragment(request),
            ),
            (SagaStep.ACTIVATE_POLICY, self._activate_policy),
        )

        failures: list[StepFailure] = []
        for step, action in steps:
            try:
                await action()
            except Exception as e:
                # Recorded, not raised: a half-restored account is worse than
                # a reported failure, so the remaining steps still run
                failures.append(StepFailure.from_exception(step, e))
                log.error("restore_step_failed", step=step.value, error=str(e), exc_info=True)

        final_state = await self._artifacts.state(request)
        if failures or final_state != ToggleState.ENABLED:
            log.warning(
                "restore_unconfirmed",
                final_state=final_state.value,
                failed_steps=[f.step.value for f in failures],
            )
            await self._broadcast(request.account, RESTORE_WARNING)
        else:
            log.info("restore_confirmed")
            await self._broadcast(request.account, RESTORED_NOTICE)

        cancelled: bool | None = None
        if failsafe_job is not None:
            if final_state == ToggleState.ENABLED:
                cancelled = await self._cancel_failsafe(failsafe_job, failures)
            else:
                # Still (partly) disabled: the pending job is the retry
                log.warning("failsafe_kept", **failsafe_job.to_dict())

        return RestoreReport(
            account=request.account,
            failures=tuple(failures),
            final_state=final_state,
            failsafe_cancelled=cancelled,
        )

    async def _broadcast(self, account: str, message: str) -> None:
        try:
            await self._notifier.broadcast(account, message)
        except Exception as e:
            self._log_operation("broadcast", account=account).warning(
                "broadcast_failed", error=str(e)
            )

    async def _activate_policy(self) -> None:
        # Never apply a policy that failed its dry run
        await self._reloader.validate()
        await self._reloader.apply()

    async def _cancel_failsafe(
        self, job: FailsafeJob, failures: list[StepFailure]
    ) -> bool:
        log = self._log_operation("cancel_failsafe", job_id=job.job_id)
        try:
            await self._scheduler.cancel(job)
        except SchedulingError as e:
            failures.append(StepFailure.from_exception(SagaStep.CANCEL_FAILSAFE, e))
            log.warning("failsafe_cancel_failed", error=str(e), fire_at=job.fire_at.isoformat())
            return False
        log.info("failsafe_cancelled")
        return True

    async def _abort(
        self,
        request: OverrideRequest,
        failed_step: SagaStep,
        error: Exception,
        job: FailsafeJob,
        compensations: tuple[SagaStep, ...],
        *,
        reactivate: bool = False,
    ) -> NoReturn:
        """Compensate completed disable steps, then raise DisableAbortedError."""
        log = self._log_operation(
            "compensate", account=request.account, failed_step=failed_step.value
        )
        log.error("disable_step_failed", error=str(error))

        actions: dict[SagaStep, Callable[[], Awaitable[None]]] = {
            SagaStep.REVERT_FACTOR_OVERRIDE: lambda: self._artifacts.revert_factor_override(
                request
            ),
            SagaStep.REMOVE_POLICY_FRAGMENT: lambda: self._artifacts.remove_policy_fragment(
                request
            ),
        }

        failures: list[StepFailure] = []
        for step in compensations:
            try:
                await actions[step]()
            except ToggleError as e:
                failures.append(StepFailure.from_exception(step, e))
                log.critical("compensation_failed", step=step.value, error=str(e))
            else:
                log.info("compensation_applied", step=step.value)

        if reactivate:
            # The restart failed with our fragment in place; bring the service
            # back up on the original policy
            try:
                await self._activate_policy()
            except PolicyError as e:
                failures.append(StepFailure.from_exception(SagaStep.ACTIVATE_POLICY, e))
                log.critical("compensation_failed", step=SagaStep.ACTIVATE_POLICY.value, error=str(e))

        if failures:
            log.critical("disable_rollback_incomplete", **job.to_dict())

        raise DisableAbortedError(
            step=failed_step,
            cause=error,
            failsafe_job=job,
            compensation_failures=tuple(failures),
        ) from error
