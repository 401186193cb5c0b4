"""Interactive checklist execution.

Walks the technician through the tasks of a PM one at a time. Only the
actions the current state allows are offered: "next" appears once the
active task is complete and "submit" once every task is.
"""

import mimetypes
from pathlib import Path
from typing import Any

import typer
from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from pmtracker.application.dto.compiled_report import CompiledReport
from pmtracker.application.use_cases.store_report import StoreReport
from pmtracker.cli.commands.pm import resolve_pm
from pmtracker.cli.formatters import format_finish_result, format_task
from pmtracker.cli.services import Services, build_services
from pmtracker.cli.theme import theme
from pmtracker.cli.utils import print_error, run_async, sanitize_terminal_input
from pmtracker.domain.errors import (
    PMTrackerError,
    ReportStorageFailed,
    StorageError,
    UploadError,
    ValidationError,
)
from pmtracker.domain.services.execution_wizard import ExecutionWizard
from pmtracker.domain.value_objects import ResultStatus, Team

console = Console()

ACTION_LABELS = {
    "o": "mark OK",
    "x": "mark NOT OK",
    "m": "measurement",
    "c": "comment",
    "f": "toggle flag",
    "p": "add photo",
    "d": "remove photo",
    "b": "back",
    "n": "next",
    "s": "submit",
    "q": "quit",
}


def _log_retry(retry_state: Any) -> None:
    exc = retry_state.outcome.exception()
    logger.warning(f"Report storage attempt {retry_state.attempt_number} failed: {exc}")
    console.print(
        f"[{theme.WARNING}]Report storage failed (attempt {retry_state.attempt_number}), "
        f"retrying...[/]"
    )


async def store_with_retry(
    store_report: StoreReport,
    failure: ReportStorageFailed,
    attempts: int,
    wait: wait_base | None = None,
) -> str:
    """Retry storing the report of an already persisted execution."""
    report = CompiledReport(
        content=failure.content,
        filename=failure.filename,
        page_count=failure.page_count,
    )
    retrying = retry(
        retry=retry_if_exception_type(StorageError),
        stop=stop_after_attempt(attempts),
        wait=wait or wait_exponential(multiplier=2, max=30),
        before_sleep=_log_retry,
        reraise=True,
    )(store_report.execute)
    return await retrying(failure.execution_id, report)


def available_actions(wizard: ExecutionWizard) -> list[str]:
    i = wizard.active_index
    actions = ["o", "x"]
    if wizard.requires_measurement(i):
        actions.append("m")
    actions += ["c", "f", "p"]
    if wizard.active_result.photos:
        actions.append("d")
    if i > 0:
        actions.append("b")
    if not wizard.is_last and wizard.can_advance():
        actions.append("n")
    if wizard.can_finalize():
        actions.append("s")
    actions.append("q")
    return actions


def _ask(label: str, default: str = "") -> str:
    return sanitize_terminal_input(Prompt.ask(f"[{theme.PROMPT}]{label}[/]", default=default))


async def _attach_photo(services: Services, wizard: ExecutionWizard) -> None:
    raw = _ask("Photo path").strip()
    if not raw:
        return
    path = Path(raw).expanduser()
    if not path.is_file():
        console.print(f"[{theme.ERROR}]No such file: {escape(str(path))}[/]")
        return
    content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    try:
        ref = await services.upload_photo.execute(
            wizard, wizard.active_index, path.read_bytes(), content_type, path.name
        )
    except (ValidationError, UploadError) as e:
        print_error(e)
        return
    console.print(f"[{theme.SUCCESS}]Photo attached:[/] [{theme.DIM}]{escape(ref)}[/]")


def _remove_photo(wizard: ExecutionWizard) -> None:
    photos = wizard.active_result.photos
    for n, ref in enumerate(photos, 1):
        console.print(f"  [{theme.OPTION_KEY}][{n}][/] {escape(ref)}")
    choice = Prompt.ask("Remove which photo", choices=[str(n) for n in range(1, len(photos) + 1)])
    wizard.remove_photo(wizard.active_index, photos[int(choice) - 1])


async def run_wizard(services: Services, wizard: ExecutionWizard) -> bool:
    """Drive the wizard until submit (True) or quit (False)."""
    while True:
        format_task(console, wizard)
        actions = available_actions(wizard)
        console.print(
            "  ".join(f"[{theme.OPTION_KEY}]{a}[/] {ACTION_LABELS[a]}" for a in actions)
        )
        choice = Prompt.ask("Action", choices=actions, show_choices=False)
        i = wizard.active_index

        if choice == "o":
            wizard.set_result(i, ResultStatus.PASSED)
        elif choice == "x":
            wizard.set_result(i, ResultStatus.FAILED)
        elif choice == "m":
            wizard.set_measurement(i, _ask("Measurement", wizard.active_result.measurement or ""))
        elif choice == "c":
            wizard.set_comment(i, _ask("Comment", wizard.active_result.comment))
        elif choice == "f":
            wizard.toggle_flag(i)
        elif choice == "p":
            await _attach_photo(services, wizard)
        elif choice == "d":
            _remove_photo(wizard)
        elif choice == "b":
            wizard.retreat()
        elif choice == "n":
            wizard.advance()
        elif choice == "s":
            if Confirm.ask("Submit the checklist and generate the report?", default=True):
                return True
        elif choice == "q":
            if Confirm.ask("Discard this session? Nothing will be saved", default=False):
                return False


def execute_pm(
    ctx: typer.Context,
    pm_id: str = typer.Argument(..., help="PM ID (full or short prefix)"),
    technician_1: str = typer.Option(..., "--tech1", help="First technician"),
    technician_2: str | None = typer.Option(None, "--tech2", help="Second technician"),
    reviewer: str | None = typer.Option(None, "--reviewer", "-r", help="Reviewing GL"),
) -> None:
    """Execute a PM checklist step by step and generate its report."""
    services = build_services(ctx.obj)

    if reviewer is None:
        reviewers = services.settings.reviewers
        reviewer = Prompt.ask(
            f"[{theme.PROMPT}]Reviewing GL[/]", choices=reviewers or None
        )
    try:
        team = Team(technician_1=technician_1, technician_2=technician_2, reviewer=reviewer)
    except PydanticValidationError as e:
        print_error(e)
        raise typer.Exit(1) from e

    run_async(_execute(services, pm_id, team))


async def _execute(services: Services, raw_pm_id: str, team: Team) -> None:
    pm_id = await resolve_pm(services, raw_pm_id)
    wizard = await services.open_execution.execute(pm_id)
    console.print(
        f"[{theme.HEADER}]{escape(wizard.template.pm_number)} - "
        f"{escape(wizard.template.name)}[/]  [{theme.DIM}]{escape(team.team_line())}[/]"
    )

    if not await run_wizard(services, wizard):
        console.print(f"[{theme.WARNING}]Session discarded[/]")
        return

    try:
        result = await services.finish_execution.execute(wizard, team)
    except ReportStorageFailed as e:
        console.print(
            f"[{theme.WARNING}]Execution saved; report storage failed: "
            f"{escape(str(e.cause))}[/]"
        )
        try:
            ref = await store_with_retry(
                services.store_report, e, services.settings.storage_retries
            )
        except PMTrackerError as retry_error:
            console.print(
                f"[{theme.ERROR_BOLD}]Report still pending.[/] Run "
                f"'pmtracker report regenerate {e.execution_id.hex[:8]}' to retry."
            )
            raise typer.Exit(1) from retry_error
        console.print(f"[{theme.SUCCESS}]Report stored:[/] {escape(ref)}")
        return

    format_finish_result(console, result)
