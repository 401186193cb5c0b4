from uuid import UUID

import typer
from rich.console import Console
from rich.markup import escape

from pmtracker.cli.commands.pm import resolve_pm
from pmtracker.cli.formatters import format_execution_table, format_photo_failures
from pmtracker.cli.services import Services, build_services
from pmtracker.cli.theme import theme
from pmtracker.cli.utils import resolve_id, run_async

console = Console()

report_app = typer.Typer(help="Execution report commands")


async def resolve_execution(services: Services, raw: str) -> UUID:
    execution_id = resolve_id(raw, await services.execution_repo.list_ids(), "execution")
    if execution_id is None:
        raise typer.Exit(1)
    return execution_id


@report_app.command(name="list")
def list_reports(
    ctx: typer.Context,
    pm_id: str = typer.Argument(..., help="PM ID (full or short prefix)"),
) -> None:
    """List the executions of a PM, newest first."""
    services = build_services(ctx.obj)

    async def _list() -> None:
        pm = await services.pm_repo.get(await resolve_pm(services, pm_id))
        if pm.template_id is None:
            console.print(f"[{theme.DIM}]PM has no checklist template yet[/]")
            return
        executions = await services.execution_repo.list_for_template(pm.template_id)
        if not executions:
            console.print(f"[{theme.DIM}]No executions found[/]")
            return
        format_execution_table(console, executions)

    run_async(_list())


@report_app.command(name="regenerate")
def regenerate_report(
    ctx: typer.Context,
    execution_id: str = typer.Argument(..., help="Execution ID (full or short prefix)"),
) -> None:
    """Recompile and store the report of a saved execution."""
    services = build_services(ctx.obj)

    async def _regenerate() -> None:
        resolved = await resolve_execution(services, execution_id)
        ref, report = await services.regenerate_report.execute(resolved)
        console.print(
            f"[{theme.SUCCESS}]Report stored:[/] {escape(report.filename)} "
            f"({report.page_count} pages)"
        )
        console.print(f"  [{theme.DIM}]{escape(ref)}[/]")
        format_photo_failures(console, report.photo_failures)

    run_async(_regenerate())
