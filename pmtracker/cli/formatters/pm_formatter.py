from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pmtracker.application.dto.pm_list_item import PMListItem
from pmtracker.cli.theme import theme
from pmtracker.domain.entities.execution import Execution
from pmtracker.domain.entities.pm_record import PMRecord


def format_pm_table(console: Console, items: list[PMListItem], title: str = "PMs") -> None:
    table = Table(title=title)
    table.add_column("ID", style=theme.TABLE_ID)
    table.add_column("PM")
    table.add_column("File", style=theme.DIM)
    table.add_column("GL")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Tasks", justify="right")
    table.add_column("Uploaded", style=theme.DIM)
    table.add_column("Last report", style=theme.DIM)

    for item in items:
        pm_label = item.pm_number or "-"
        if item.pm_name and item.pm_name != item.pm_number:
            pm_label += f" - {item.pm_name}"
        status = f"[{theme.pm_status(item.status)}]{item.status.value}[/]"
        if not item.active:
            status += f" [{theme.DIM}](deleted)[/]"
        table.add_row(
            item.pm_id.hex[:8],
            escape(pm_label[:40]),
            escape(item.file_name[:30]),
            escape(item.owner or "-"),
            escape(item.pm_type or "-"),
            status,
            str(item.task_count) if item.has_template else "-",
            item.uploaded_at.strftime("%Y-%m-%d %H:%M"),
            escape(item.last_report_ref or "-"),
        )

    console.print(table)


def format_pm_status(console: Console, pm: PMRecord) -> None:
    console.print(
        f"PM [{theme.TABLE_ID}]{pm.id.hex[:8]}[/] ({escape(pm.file_name)}) is now "
        f"[{theme.pm_status(pm.status)}]{pm.status.value}[/]"
    )


def format_execution_table(console: Console, executions: list[Execution]) -> None:
    table = Table(title="Executions")
    table.add_column("ID", style=theme.TABLE_ID)
    table.add_column("Finished")
    table.add_column("Team")
    table.add_column("OK / NOT OK / Flagged", justify="right")
    table.add_column("Minutes", justify="right")
    table.add_column("Report", style=theme.DIM)

    for e in executions:
        s = e.summary()
        table.add_row(
            e.id.hex[:8],
            e.finished_at.strftime("%Y-%m-%d %H:%M"),
            escape(e.team.team_line()),
            f"{s.passed} / {s.failed} / {s.flagged}",
            str(e.duration_minutes),
            escape(e.report_ref or "pending"),
        )

    console.print(table)
