from pmtracker.cli.formatters.pm_formatter import (
    format_execution_table,
    format_pm_status,
    format_pm_table,
)
from pmtracker.cli.formatters.wizard_formatter import (
    format_finish_result,
    format_photo_failures,
    format_progress,
    format_task,
)

__all__ = [
    "format_execution_table",
    "format_finish_result",
    "format_photo_failures",
    "format_pm_status",
    "format_pm_table",
    "format_progress",
    "format_task",
]
