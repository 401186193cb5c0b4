"""CLI theme configuration - all colors in one place.

Colors use Rich markup syntax (e.g., "green", "bold red", "dim italic").
"""

from pmtracker.domain.value_objects import PMStatus, ResultStatus


class Theme:
    """Terminal color theme for the pmtracker CLI."""

    # -------------------------------------------------------------------------
    # Status colors (for success/error/warning indicators)
    # -------------------------------------------------------------------------
    SUCCESS = "green"
    SUCCESS_BOLD = "bold green"
    ERROR = "red"
    ERROR_BOLD = "bold red"
    WARNING = "yellow"
    WARNING_BOLD = "bold yellow"
    INFO = "cyan"
    INFO_BOLD = "bold cyan"

    # -------------------------------------------------------------------------
    # Text styles
    # -------------------------------------------------------------------------
    HEADER = "bold"
    DIM = "grey62"
    DIM_ITALIC = "grey62 italic"

    # -------------------------------------------------------------------------
    # Interactive elements (prompts, options)
    # -------------------------------------------------------------------------
    PROMPT = "cyan"
    OPTION_KEY = "bold cyan"
    BLOCKING = "bold red"

    # -------------------------------------------------------------------------
    # Table columns
    # -------------------------------------------------------------------------
    TABLE_ID = "cyan"
    TABLE_LABEL = "grey62"
    TABLE_VALUE = "bold"

    # -------------------------------------------------------------------------
    # PM lifecycle
    # -------------------------------------------------------------------------
    PM_OPEN = "bold yellow"
    PM_COMPLETED = "bold green"
    PM_CLOSED = "grey62"

    # -------------------------------------------------------------------------
    # Task results
    # -------------------------------------------------------------------------
    RESULT_PASSED = "green"
    RESULT_FAILED = "red"
    RESULT_PENDING = "grey62"
    FLAGGED = "bold dark_orange"

    # -------------------------------------------------------------------------
    # Panel borders
    # -------------------------------------------------------------------------
    BORDER_INFO = "blue"
    BORDER_ERROR = "red"
    BORDER_WARNING = "dark_orange"

    def pm_status(self, status: PMStatus) -> str:
        return {
            PMStatus.OPEN: self.PM_OPEN,
            PMStatus.COMPLETED: self.PM_COMPLETED,
            PMStatus.CLOSED: self.PM_CLOSED,
        }[status]

    def result_status(self, status: ResultStatus) -> str:
        return {
            ResultStatus.PASSED: self.RESULT_PASSED,
            ResultStatus.FAILED: self.RESULT_FAILED,
            ResultStatus.PENDING: self.RESULT_PENDING,
        }[status]


theme = Theme()
