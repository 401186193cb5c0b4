import sys
from datetime import datetime
from pathlib import Path

import typer
from loguru import logger

from pmtracker.cli.commands import config, execute, pm, report
from pmtracker.cli.utils import print_error
from pmtracker.infrastructure.config.settings import load_settings
from pmtracker.infrastructure.persistence._paths import StatePaths


def get_log_path(state_dir: Path) -> Path:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return StatePaths(state_dir).logs_dir / f"pmtracker_{timestamp}.log"


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure loguru logging."""
    logger.remove()

    file_path = log_file or Path("pmtracker.log")
    logger.add(
        file_path,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
        rotation="10 MB",
        encoding="utf-8",
    )

    if verbose:
        logger.add(
            sys.stderr,
            format="{time:HH:mm:ss} | {level: <8} | {message}",
            level="DEBUG",
        )


app = typer.Typer(
    name="pmtracker",
    help="pmtracker - preventive maintenance checklists, executions and reports",
    no_args_is_help=True,
)

app.command(name="execute")(execute.execute_pm)
app.add_typer(pm.pm_app, name="pm")
app.add_typer(report.report_app, name="report")
app.add_typer(config.config_app, name="config")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output", is_eager=True),
    state_dir: Path | None = typer.Option(None, "--state-dir", help="State directory"),
) -> None:
    """pmtracker - preventive maintenance checklists, executions and reports."""
    try:
        settings = load_settings()
    except ValueError as e:
        print_error(e)
        raise typer.Exit(1) from e
    if state_dir is not None:
        settings = settings.model_copy(update={"state_dir": state_dir})

    setup_logging(verbose=verbose, log_file=get_log_path(settings.state_dir))
    ctx.obj = settings


if __name__ == "__main__":
    app()
