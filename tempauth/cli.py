"""CLI for tempauth.

Commands:
    disable     Temporarily disable 2FA for an account, wait, then restore it
    restore     Restore 2FA for an account (also what the failsafe job runs)

Examples:
    tempauth disable                      # $SUDO_USER from this SSH client's IP
    tempauth disable bobby -a 10.1.1.4    # bobby from one address
    tempauth disable bobby -a 10.1.1.0/24 # bobby from a subnet
    tempauth restore bobby                # undo any changes made for bobby
"""

import asyncio
import json
import signal
from enum import Enum
from typing import Any, NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from tempauth import __version__
from tempauth.bootstrap import Container, build_container, configure_structlog
from tempauth.config.toggle_config import (
    MAX_WINDOW_SECONDS,
    MIN_WINDOW_SECONDS,
    ToggleConfig,
)
from tempauth.domain.errors import (
    DisableAbortedError,
    NotDisabledError,
    PolicyReloadError,
    PolicyValidationError,
    PrerequisiteError,
    RequestResolutionError,
    SchedulingError,
)
from tempauth.domain.exceptions import TempAuthError
from tempauth.domain.models import (
    CancellationToken,
    DisableReport,
    OverrideRequest,
    RestoreReport,
    ToggleMode,
    WatchdogOutcome,
)
from tempauth.infrastructure.observability import generate_run_id, set_run_id


class OutputFormat(str, Enum):
    """Output format options."""

    text = "text"
    json = "json"


app = typer.Typer(
    name="tempauth",
    help="Temporarily disables two-factor authentication (2FA) for an SSH account.",
    add_completion=False,
)
console = Console()

_OUTCOME_TEXT = {
    WatchdogOutcome.CONNECTED: "[green]user {account} connected[/green]",
    WatchdogOutcome.TIMED_OUT: "[red]time ran out[/red]",
    WatchdogOutcome.ABORTED: "[red]aborted[/red]",
    WatchdogOutcome.FAILED: "[red]watching for the connection failed[/red]",
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"tempauth version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Temporary SSH 2FA exemption with guaranteed restore.

    A failsafe at(1) job is scheduled before anything changes, so 2FA
    comes back even if this process is killed.
    """
    pass


@app.command()
def disable(
    account: Optional[str] = typer.Argument(
        None,
        help="Account to exempt (default: $SUDO_USER)",
    ),
    addr: Optional[str] = typer.Option(
        None,
        "--addr",
        "-a",
        help="Source IP or CIDR allowed in without 2FA (default: this SSH client)",
    ),
    window: Optional[int] = typer.Option(
        None,
        "--window",
        "-w",
        min=MIN_WINDOW_SECONDS,
        max=MAX_WINDOW_SECONDS,
        help="Seconds 2FA stays disabled (default: $TEMPAUTH_WINDOW_SECONDS or 30)",
    ),
    dry: bool = typer.Option(
        False,
        "--dry",
        "-d",
        help="Print the resolved arguments and exit without changing anything",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.text,
        "--format",
        "-o",
        help="Output format: text or json",
    ),
) -> None:
    """Disable 2FA for ACCOUNT until it connects or the window runs out.

    Example:
        tempauth disable bobby --addr 10.1.1.4 --window 60
    """
    container = _prepare(window)
    request = _resolve(container, ToggleMode.DISABLE, account, addr, output_format)
    if dry:
        _finish_dry_run(output_format)

    quiet = output_format == OutputFormat.json
    if not quiet:
        console.print(f"\nDisabling 2fa for user {request.account} ...")

    try:
        report = asyncio.run(_disable_async(container, request, quiet))
    except TempAuthError as e:
        _fail(e, output_format)

    _output_disable_report(report, output_format)
    if not report.restore.is_confirmed:
        raise typer.Exit(code=1)


@app.command()
def restore(
    account: Optional[str] = typer.Argument(
        None,
        help="Account to restore (default: $SUDO_USER)",
    ),
    dry: bool = typer.Option(
        False,
        "--dry",
        "-d",
        help="Print the resolved arguments and exit without changing anything",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.text,
        "--format",
        "-o",
        help="Output format: text or json",
    ),
) -> None:
    """Restore 2FA for ACCOUNT; fails if it is not currently disabled.

    Example:
        tempauth restore bobby
    """
    container = _prepare(None)
    request = _resolve(container, ToggleMode.RESTORE, account, None, output_format)
    if dry:
        _finish_dry_run(output_format)

    if output_format == OutputFormat.text:
        console.print(f"\nRestoring 2fa for user {request.account} ...")

    try:
        report = asyncio.run(container.orchestrator.restore(request))
    except TempAuthError as e:
        _fail(e, output_format)

    _output_restore_report(report, output_format)
    if not report.is_confirmed:
        raise typer.Exit(code=1)


def _prepare(window: Optional[int]) -> Container:
    """Load config, configure logging and wire the services."""
    config = ToggleConfig.from_environment()
    if window is not None:
        config = config.with_window(window)
    configure_structlog(config.environment)
    set_run_id(generate_run_id())
    return build_container(config)


def _resolve(
    container: Container,
    mode: ToggleMode,
    account: Optional[str],
    addr: Optional[str],
    output_format: OutputFormat,
) -> OverrideRequest:
    try:
        container.prerequisites.verify()
        request = container.resolver.resolve(mode, account=account, address=addr)
    except TempAuthError as e:
        _fail(e, output_format)
    _output_request(request, container.config, output_format)
    return request


async def _disable_async(
    container: Container, request: OverrideRequest, quiet: bool
) -> DisableReport:
    """Run the disable saga with SIGINT/SIGTERM wired to the cancellation token."""
    token = CancellationToken()
    loop = asyncio.get_running_loop()
    handled = (signal.SIGINT, signal.SIGTERM)
    for sig in handled:
        loop.add_signal_handler(sig, token.cancel, sig.name)

    prefix = f"Waiting for {request.account} to connect..."
    try:
        with console.status(prefix, spinner="dots") as status:

            def on_tick(remaining: float) -> None:
                if not quiet:
                    status.update(f"{prefix} {int(remaining)}")

            report = await container.orchestrator.disable(
                request,
                token,
                window_seconds=container.config.window_seconds,
                on_tick=on_tick,
            )
    finally:
        for sig in handled:
            loop.remove_signal_handler(sig)

    if not quiet:
        console.print(
            f"{prefix} "
            + _OUTCOME_TEXT[report.watchdog_outcome].format(account=request.account)
        )
    return report


def _output_request(
    request: OverrideRequest, config: ToggleConfig, output_format: OutputFormat
) -> None:
    if output_format == OutputFormat.json:
        console.print_json(
            json.dumps({**request.to_dict(), "window_seconds": config.window_seconds})
        )
        return

    console.print("Script starting")
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("username", request.account)
    table.add_row("ip_addr", request.address or "-")
    table.add_row("ga_path", str(request.factor_path))
    table.add_row("sshd_conf_path", str(request.fragment_path))
    table.add_row("mode", request.mode.value)
    if request.mode == ToggleMode.DISABLE:
        table.add_row("window", f"{config.window_seconds}s")
    console.print(table)


def _finish_dry_run(output_format: OutputFormat) -> NoReturn:
    if output_format == OutputFormat.text:
        console.print("\n--dry goodbye")
    raise typer.Exit(code=0)


def _output_disable_report(report: DisableReport, output_format: OutputFormat) -> None:
    if output_format == OutputFormat.json:
        console.print_json(json.dumps(report.to_dict()))
        return
    console.print(
        f"Failsafe job {report.failsafe_job.job_id} was scheduled for "
        f"{report.failsafe_job.fire_at:%H:%M:%S} UTC"
    )
    _output_restore_report(report.restore, output_format)


def _output_restore_report(report: RestoreReport, output_format: OutputFormat) -> None:
    if output_format == OutputFormat.json:
        console.print_json(json.dumps(report.to_dict()))
        return

    for failure in report.failures:
        console.print(
            f"[red]FAILED[/red] {failure.step.value}: {failure.message}",
            highlight=False,
        )
    if report.is_confirmed:
        console.print("[green]2FA restored[/green]")
    else:
        console.print(
            "[bold red]WARNING:[/bold red] 2FA could not be fully restored "
            f"(state: {report.final_state.value}). Make sure you can still "
            "connect to the server before closing this connection."
        )
    if report.failsafe_cancelled is False:
        console.print("[yellow]Failsafe job could not be removed; it will fire harmlessly.[/yellow]")


def _error_message(error: TempAuthError) -> str:
    """Operator-facing text for each failure kind."""
    if isinstance(error, DisableAbortedError):
        cause = error.cause
        if isinstance(cause, PolicyValidationError):
            head = "sshd rejected the generated configuration; changes were rolled back"
        elif isinstance(cause, PolicyReloadError):
            head = "sshd could not be restarted; changes were rolled back"
        else:
            head = "2FA could not be disabled; changes were rolled back"
        if not error.rolled_back:
            head = head.replace(
                "changes were rolled back", "rollback was INCOMPLETE"
            )
        return (
            f"{head}: {cause}\nFailsafe job {error.failsafe_job.job_id} "
            f"restores the account at {error.failsafe_job.fire_at:%H:%M:%S} UTC."
        )
    if isinstance(error, SchedulingError):
        return f"Could not schedule the failsafe restore, nothing was changed: {error}"
    if isinstance(error, NotDisabledError):
        return "2FA hasn't been deactivated for this account."
    if isinstance(error, (PrerequisiteError, RequestResolutionError)):
        return str(error)
    return f"Unexpected failure: {error}"


def _fail(error: TempAuthError, output_format: OutputFormat) -> NoReturn:
    if output_format == OutputFormat.json:
        payload: dict[str, Any] = {
            "error": type(error).__name__,
            "message": _error_message(error),
        }
        console.print_json(json.dumps(payload))
    else:
        console.print(f"[red]Error:[/red] {_error_message(error)}", highlight=False)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
