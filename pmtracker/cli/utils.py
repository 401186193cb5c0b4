"""CLI utility functions."""

import asyncio
from collections.abc import Coroutine, Iterable
from typing import Any, TypeVar
from uuid import UUID

import typer
from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape

from pmtracker.cli.theme import theme
from pmtracker.domain.errors import PMTrackerError, ValidationError

T = TypeVar("T")

console = Console()


def sanitize_terminal_input(text: str) -> str:
    """Remove surrogate characters that can't be encoded as UTF-8.

    Terminal input can sometimes contain surrogate characters (U+D800 to U+DFFF)
    due to encoding issues.
    """
    return text.encode("utf-8", "ignore").decode("utf-8")


def print_error(error: BaseException) -> None:
    console.print(f"[{theme.ERROR_BOLD}]Error:[/] {escape(str(error))}")
    if isinstance(error, ValidationError):
        for reason in error.reasons:
            console.print(f"  [{theme.DIM}]- {escape(reason)}[/]")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a command coroutine; tracker errors become a red message and exit 1."""
    try:
        return asyncio.run(coro)
    except (PMTrackerError, PydanticValidationError) as e:
        logger.error(f"Command failed: {e}")
        print_error(e)
        raise typer.Exit(1) from e


def resolve_id(raw: str, candidates: Iterable[UUID], kind: str) -> UUID | None:
    """Resolve an ID string to a full UUID.

    Supports both full UUIDs and short prefixes (minimum 4 characters).
    Returns None if not found or ambiguous.
    """
    try:
        return UUID(raw)
    except ValueError:
        pass

    prefix = raw.lower().replace("-", "")
    if len(prefix) < 4:
        console.print(f"[{theme.ERROR}]{kind} ID prefix must be at least 4 characters[/]")
        return None

    matches = [c for c in candidates if c.hex.startswith(prefix)]
    if not matches:
        console.print(f"[{theme.ERROR}]No {kind} found with prefix: {escape(prefix)}[/]")
        return None
    if len(matches) > 1:
        console.print(
            f"[{theme.ERROR}]Ambiguous prefix '{escape(prefix)}' matches {len(matches)} {kind}s:[/]"
        )
        for m in matches[:5]:
            console.print(f"  [{theme.DIM}]{m}[/]")
        if len(matches) > 5:
            console.print(f"  [{theme.DIM}]...and {len(matches) - 5} more[/]")
        return None

    return matches[0]
