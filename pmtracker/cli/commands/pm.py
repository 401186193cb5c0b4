from pathlib import Path
from uuid import UUID

import typer
from rich.console import Console
from rich.markup import escape

from pmtracker.application.dto.template_payload import TemplatePayload
from pmtracker.cli.formatters import format_pm_status, format_pm_table
from pmtracker.cli.services import Services, build_services
from pmtracker.cli.theme import theme
from pmtracker.cli.utils import resolve_id, run_async
from pmtracker.domain.value_objects import PMFilter, PMStatus
from pmtracker.infrastructure.config.settings import TrackerSettings

console = Console()

pm_app = typer.Typer(help="PM checklist management commands")


async def resolve_pm(services: Services, raw: str) -> UUID:
    pms = await services.pm_repo.list()
    pm_id = resolve_id(raw, (pm.id for pm in pms), "PM")
    if pm_id is None:
        raise typer.Exit(1)
    return pm_id


@pm_app.command(name="register")
def register_pm(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="PM checklist PDF"),
    owner: str = typer.Option("", "--owner", "-o", help="Responsible GL"),
    pm_type: str = typer.Option("", "--type", "-t", help="PM type"),
    uploaded_by: str = typer.Option("admin", "--by", help="Uploader name"),
) -> None:
    """Store a PM checklist document and open a PM for it."""
    services = build_services(ctx.obj)

    async def _register() -> None:
        pm = await services.register_pm.execute(
            file_name=file.name,
            content=file.read_bytes(),
            owner=owner,
            pm_type=pm_type,
            uploaded_by=uploaded_by,
        )
        console.print(
            f"[{theme.SUCCESS}]Registered PM[/] [{theme.TABLE_ID}]{pm.id}[/] "
            f"({escape(pm.file_name)})"
        )
        console.print(
            f"[{theme.DIM}]Next: pmtracker pm import {pm.id.hex[:8]} <payload.json>[/]"
        )

    run_async(_register())


@pm_app.command(name="import")
def import_template(
    ctx: typer.Context,
    pm_id: str = typer.Argument(..., help="PM ID (full or short prefix)"),
    payload_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Extracted checklist JSON"
    ),
) -> None:
    """Create the checklist template of a PM from an extracted payload."""
    services = build_services(ctx.obj)

    async def _import() -> None:
        resolved = await resolve_pm(services, pm_id)
        payload = TemplatePayload.model_validate_json(payload_file.read_text(encoding="utf-8"))
        template = await services.import_template.execute(resolved, payload)
        console.print(
            f"[{theme.SUCCESS}]Template ready:[/] {escape(template.pm_number)} - "
            f"{escape(template.name)} ({len(template.tasks)} tasks)"
        )

    run_async(_import())


@pm_app.command(name="list")
def list_pms(
    ctx: typer.Context,
    owner: str | None = typer.Option(None, "--owner", "-o", help="Only PMs of this GL"),
    statuses: list[PMStatus] | None = typer.Option(
        None, "--status", "-s", help="Only PMs in these statuses (repeatable)"
    ),
    pm_type: str | None = typer.Option(None, "--type", "-t", help="Only PMs of this type"),
    include_inactive: bool = typer.Option(False, "--all", help="Include deleted PMs"),
) -> None:
    """List PMs, newest upload first."""
    settings: TrackerSettings = ctx.obj
    services = build_services(settings)

    default = settings.default_filter
    pm_filter = PMFilter(
        owner=owner if owner is not None else default.owner,
        statuses=frozenset(statuses) if statuses else default.statuses,
        pm_type=pm_type if pm_type is not None else default.pm_type,
        include_inactive=include_inactive or default.include_inactive,
    )

    async def _list() -> None:
        items = await services.list_pms.execute(pm_filter)
        if not items:
            console.print(f"[{theme.DIM}]No PMs found[/]")
            return
        format_pm_table(console, items)

    run_async(_list())


@pm_app.command(name="close")
def close_pm(
    ctx: typer.Context,
    pm_id: str = typer.Argument(..., help="PM ID (full or short prefix)"),
) -> None:
    """Close a completed PM after review."""
    services = build_services(ctx.obj)

    async def _close() -> None:
        pm = await services.change_status.close(await resolve_pm(services, pm_id))
        format_pm_status(console, pm)

    run_async(_close())


@pm_app.command(name="reopen")
def reopen_pm(
    ctx: typer.Context,
    pm_id: str = typer.Argument(..., help="PM ID (full or short prefix)"),
) -> None:
    """Reopen a closed PM (back to completed)."""
    services = build_services(ctx.obj)

    async def _reopen() -> None:
        pm = await services.change_status.reopen(await resolve_pm(services, pm_id))
        format_pm_status(console, pm)

    run_async(_reopen())


@pm_app.command(name="delete")
def delete_pm(
    ctx: typer.Context,
    pm_id: str = typer.Argument(..., help="PM ID (full or short prefix)"),
) -> None:
    """Hide a PM from listings. Its executions and reports are kept."""
    services = build_services(ctx.obj)

    async def _delete() -> None:
        resolved = await resolve_pm(services, pm_id)
        await services.delete_pm.execute(resolved)
        console.print(f"[{theme.WARNING}]Deleted PM[/] [{theme.TABLE_ID}]{resolved}[/]")

    run_async(_delete())
