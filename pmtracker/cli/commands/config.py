import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pmtracker.cli.theme import theme
from pmtracker.infrastructure.config.settings import (
    TrackerSettings,
    project_config_path,
    user_config_path,
)

console = Console()

config_app = typer.Typer(help="Configuration commands")


@config_app.command(name="show")
def show_config(ctx: typer.Context) -> None:
    """Show the effective settings."""
    settings: TrackerSettings = ctx.obj

    table = Table(title="Settings")
    table.add_column("Setting", style=theme.INFO)
    table.add_column("Value")

    for name, value in settings.model_dump(mode="json").items():
        if isinstance(value, list):
            shown = ", ".join(str(v) for v in value) or "-"
        elif isinstance(value, dict):
            shown = ", ".join(f"{k}={v}" for k, v in value.items() if v not in (None, False))
            shown = shown or "-"
        else:
            shown = str(value)
        table.add_row(name, escape(shown))

    console.print(table)
    paths = (("User config", user_config_path()), ("Project config", project_config_path()))
    for label, path in paths:
        marker = "" if path.exists() else f" [{theme.DIM}](not found)[/]"
        console.print(f"[{theme.TABLE_LABEL}]{label}:[/] {escape(str(path))}{marker}")
