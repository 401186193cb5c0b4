from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from pmtracker.application.dto.compiled_report import PhotoFailure
from pmtracker.application.dto.finish_result import FinishResult
from pmtracker.cli.theme import theme
from pmtracker.domain.services.execution_wizard import ExecutionWizard
from pmtracker.domain.value_objects import ResultStatus


def format_progress(wizard: ExecutionWizard) -> str:
    p = wizard.progress()
    return (
        f"[{theme.RESULT_PASSED}]{p.passed} OK[/]  "
        f"[{theme.RESULT_FAILED}]{p.failed} NOT OK[/]  "
        f"[{theme.RESULT_PENDING}]{p.pending} pending[/]  "
        f"[{theme.FLAGGED}]{p.flagged} flagged[/]"
    )


def format_task(console: Console, wizard: ExecutionWizard) -> None:
    """Show the active task with its recorded result."""
    i = wizard.active_index
    task = wizard.active_task
    result = wizard.active_result

    body = Table(show_header=False, box=None, padding=(0, 2))
    body.add_column("Label", style=theme.TABLE_LABEL)
    body.add_column("Value")
    if task.key_points:
        body.add_row("Key points", escape(task.key_points))
    if task.rationale:
        body.add_row("Reason", escape(task.rationale))
    body.add_row(
        "Result",
        f"[{theme.result_status(result.status)}]{result.status.value}[/]",
    )
    if wizard.requires_measurement(i):
        body.add_row("Measurement", escape(result.measurement or "-"))
    body.add_row("Comment", escape(result.comment or "-"))
    if result.flagged:
        body.add_row("Flag", f"[{theme.FLAGGED}]needs GL review[/]")
    for ref in result.photos:
        body.add_row("Photo", f"[{theme.DIM}]{escape(ref)}[/]")

    border = theme.BORDER_WARNING if result.flagged else theme.BORDER_INFO
    console.print()
    console.print(
        Panel(
            body,
            title=f"[{theme.HEADER}]{i + 1}/{len(wizard)}  "
            f"{escape(f'[{task.sequence_number}] {task.title}')}[/]",
            subtitle=format_progress(wizard),
            border_style=border,
        )
    )

    reasons = wizard.blocking_reasons(i)
    if reasons and result.status != ResultStatus.PENDING:
        for reason in reasons:
            console.print(f"  [{theme.BLOCKING}]! {reason}[/]")


def format_photo_failures(console: Console, failures: list[PhotoFailure]) -> None:
    if not failures:
        return
    console.print(f"\n[{theme.WARNING_BOLD}]{len(failures)} photo(s) could not be embedded:[/]")
    for f in failures:
        console.print(f"  [{theme.DIM}]{escape(f.ref)}[/] - {escape(f.reason)}")


def format_finish_result(console: Console, result: FinishResult) -> None:
    s = result.summary
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Label", style=theme.TABLE_LABEL)
    table.add_column("Value", style=theme.TABLE_VALUE)
    table.add_row("Execution", str(result.execution_id))
    table.add_row("OK", f"{s.passed}/{s.total}")
    table.add_row("NOT OK", f"{s.failed}/{s.total}")
    table.add_row("Flagged", f"{s.flagged}/{s.total}")
    table.add_row("Duration (min)", str(result.duration_minutes))
    table.add_row("Pages", str(result.page_count))
    table.add_row("Report", escape(result.report_filename))
    table.add_row("Stored at", escape(result.report_ref))

    console.print(
        Panel(
            table,
            title=f"[{theme.SUCCESS_BOLD}]Execution complete[/]",
            border_style=theme.SUCCESS,
        )
    )
    format_photo_failures(console, result.photo_failures)
