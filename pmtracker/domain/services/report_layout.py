"""Page layout for execution reports.

Everything here is pure: blocks know their own height, and pagination is
a fold over the block list that threads the vertical cursor explicitly.
A block is never split across pages.
"""

from dataclasses import dataclass, field
from enum import Enum

from pmtracker.domain.entities.checklist_task import ChecklistTask
from pmtracker.domain.entities.execution import Execution
from pmtracker.domain.entities.task_result import RecordedResult
from pmtracker.domain.services.text_sanitizer import sanitize_for_pdf, wrap_text
from pmtracker.domain.value_objects import ResultStatus

# A4 landscape, points
PAGE_WIDTH = 842.0
PAGE_HEIGHT = 595.0
PAGE_MARGIN = 40.0

TITLE_SIZE = 16
SUBTITLE_SIZE = 12
TEXT_SIZE = 10
TASK_HEADER_SIZE = 10
TASK_BODY_SIZE = 9
CAPTION_SIZE = 7
LINE_GAP = 4
BOX_PADDING = 6

SUMMARY_HEIGHT = 40.0
THUMB_WIDTH = 170.0
THUMB_HEIGHT = 110.0
THUMB_GAP = 12.0
PHOTO_LABEL_HEIGHT = 14.0
PHOTO_CAPTION_HEIGHT = 12.0
PHOTOS_PER_ROW = 2
CAPTION_CHARS = 60

REPORT_TITLE = "PM EXECUTION REPORT"
FLAG_WARNING = "FLAG: Requires GL / maintenance review"
TRUNCATED_NOTE = "[text truncated to fit the page]"

# Helvetica-Bold runs wider than the regular-weight estimate in wrap_text
BOLD_WIDTH_FACTOR = 1.1


@dataclass(frozen=True)
class PageGeometry:
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT
    margin: float = PAGE_MARGIN

    @property
    def top(self) -> float:
        return self.height - self.margin

    @property
    def bottom(self) -> float:
        return self.margin

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin


class Tone(str, Enum):
    """Visual status of a task block; FLAGGED wins over pass/fail."""

    NEUTRAL = "neutral"
    PASSED = "passed"
    FAILED = "failed"
    FLAGGED = "flagged"


# ----------------------------------------------------------------------
# Blocks
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class HeaderBlock:
    title: str
    pm_lines: tuple[str, ...]
    team_line: str
    time_line: str
    duration_line: str
    gap_after: float = TEXT_SIZE + LINE_GAP

    @property
    def height(self) -> float:
        title_lines = 1 + len(self.pm_lines)
        return (
            (TITLE_SIZE + LINE_GAP) * title_lines
            + (SUBTITLE_SIZE + LINE_GAP)
            + (TEXT_SIZE + LINE_GAP) * 3
        )

    @property
    def pm_line(self) -> str:
        return " ".join(self.pm_lines)


@dataclass(frozen=True)
class SummaryBlock:
    total: int
    passed: int
    failed: int
    flagged: int
    gap_after: float = 16.0

    @property
    def height(self) -> float:
        return SUMMARY_HEIGHT


@dataclass(frozen=True)
class HeadingBlock:
    text: str
    size: int = SUBTITLE_SIZE
    gap_after: float = TEXT_SIZE + LINE_GAP

    @property
    def height(self) -> float:
        return self.size + LINE_GAP


@dataclass(frozen=True)
class TaskBlock:
    header_lines: tuple[str, ...]
    lines: tuple[str, ...]
    tone: Tone
    flag_line_index: int | None = None
    gap_after: float = 10.0

    @property
    def height(self) -> float:
        header_h = len(self.header_lines) * (TASK_HEADER_SIZE + LINE_GAP)
        body_h = len(self.lines) * (TASK_BODY_SIZE + LINE_GAP)
        return header_h + body_h + BOX_PADDING * 2

    @property
    def header(self) -> str:
        return " ".join(self.header_lines)


@dataclass(frozen=True)
class PhotoCell:
    ref: str
    caption: str
    image: bytes | None = None
    error: str | None = None


@dataclass(frozen=True)
class PhotoRowBlock:
    cells: tuple[PhotoCell, ...]
    gap_after: float = 6.0

    @property
    def height(self) -> float:
        return PHOTO_LABEL_HEIGHT + THUMB_HEIGHT + PHOTO_CAPTION_HEIGHT + 8


Block = HeaderBlock | SummaryBlock | HeadingBlock | TaskBlock | PhotoRowBlock


# ----------------------------------------------------------------------
# Pagination
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Placement:
    top: float
    new_cursor: float
    page_break: bool


def place(cursor: float, height: float, page: PageGeometry) -> Placement:
    """Place one block of the given height with its top at the cursor.

    Starts a new page when the block does not fit in the remaining space.
    A block taller than a whole page still goes at the top of a page.
    """
    at_page_top = cursor >= page.top
    if cursor - height < page.bottom and not at_page_top:
        return Placement(top=page.top, new_cursor=page.top - height, page_break=True)
    return Placement(top=cursor, new_cursor=cursor - height, page_break=False)


@dataclass(frozen=True)
class PlacedBlock:
    block: Block
    page_index: int
    top: float


@dataclass
class ReportLayout:
    page: PageGeometry
    placed: list[PlacedBlock] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        if not self.placed:
            return 1
        return self.placed[-1].page_index + 1

    def blocks_on_page(self, page_index: int) -> list[PlacedBlock]:
        return [p for p in self.placed if p.page_index == page_index]


def paginate(blocks: list[Block], page: PageGeometry | None = None) -> ReportLayout:
    page = page or PageGeometry()
    layout = ReportLayout(page=page)
    cursor = page.top
    page_index = 0
    for block in blocks:
        placement = place(cursor, block.height, page)
        if placement.page_break:
            page_index += 1
        layout.placed.append(PlacedBlock(block=block, page_index=page_index, top=placement.top))
        cursor = placement.new_cursor - block.gap_after
    return layout


# ----------------------------------------------------------------------
# Block builders
# ----------------------------------------------------------------------


def header_block(
    execution: Execution,
    pm_number: str,
    pm_name: str,
    page: PageGeometry | None = None,
) -> HeaderBlock:
    page = page or PageGeometry()
    pm_line = sanitize_for_pdf(f"PM: {pm_number} - {pm_name}")
    started = execution.started_at.strftime("%Y-%m-%d %H:%M")
    finished = execution.finished_at.strftime("%Y-%m-%d %H:%M")
    return HeaderBlock(
        title=REPORT_TITLE,
        pm_lines=tuple(wrap_text(pm_line, page.content_width, TITLE_SIZE)),
        team_line=sanitize_for_pdf(execution.team.team_line()),
        time_line=f"Start: {started}  |  End: {finished}",
        duration_line=f"Duration (min): {execution.duration_minutes}",
    )


def summary_block(execution: Execution) -> SummaryBlock:
    s = execution.summary()
    return SummaryBlock(total=s.total, passed=s.passed, failed=s.failed, flagged=s.flagged)


def task_tone(result: RecordedResult) -> Tone:
    if result.flagged:
        return Tone.FLAGGED
    if result.status == ResultStatus.PASSED:
        return Tone.PASSED
    if result.status == ResultStatus.FAILED:
        return Tone.FAILED
    return Tone.NEUTRAL


_ICONS = {
    Tone.FLAGGED: "[!]",
    Tone.PASSED: "[O]",
    Tone.FAILED: "[X]",
    Tone.NEUTRAL: "[ ]",
}

_STATUS_LABELS = {
    ResultStatus.PASSED: "OK",
    ResultStatus.FAILED: "NOT OK",
    ResultStatus.PENDING: "Pending",
}


def task_block(task: ChecklistTask, result: RecordedResult, page: PageGeometry) -> TaskBlock:
    tone = task_tone(result)
    label = _STATUS_LABELS[result.status]
    if result.flagged:
        label += " - NEEDS REVIEW"
    inner_width = page.content_width - 2 * BOX_PADDING
    header = sanitize_for_pdf(
        f"[{task.sequence_number}] {_ICONS[tone]} {task.title}  [{label}]"
    )
    header_lines = tuple(wrap_text(header, inner_width, TASK_HEADER_SIZE * BOLD_WIDTH_FACTOR))

    fields: list[str] = []
    if task.key_points:
        fields.append(f"Key points: {task.key_points}")
    if task.rationale:
        fields.append(f"Reason: {task.rationale}")
    if result.measurement:
        fields.append(f"Measurement: {result.measurement}")
    if result.comment:
        fields.append(f"Comment: {result.comment}")

    lines: list[str] = []
    for text in fields:
        lines.extend(wrap_text(sanitize_for_pdf(text), inner_width, TASK_BODY_SIZE))

    # The whole box must fit on one page; the flag line always survives.
    free_h = page.top - page.bottom - 2 * BOX_PADDING
    free_h -= len(header_lines) * (TASK_HEADER_SIZE + LINE_GAP)
    max_lines = max(1, int(free_h // (TASK_BODY_SIZE + LINE_GAP)) - (1 if result.flagged else 0))
    if len(lines) > max_lines:
        lines = [*lines[: max_lines - 1], TRUNCATED_NOTE]

    flag_index = None
    if result.flagged:
        flag_index = len(lines)
        lines.append(FLAG_WARNING)

    return TaskBlock(
        header_lines=header_lines, lines=tuple(lines), tone=tone, flag_line_index=flag_index
    )


def photo_caption(ref: str) -> str:
    return sanitize_for_pdf(ref[:CAPTION_CHARS])


def photo_rows(cells: list[PhotoCell]) -> list[PhotoRowBlock]:
    return [
        PhotoRowBlock(cells=tuple(cells[i : i + PHOTOS_PER_ROW]))
        for i in range(0, len(cells), PHOTOS_PER_ROW)
    ]
