"""reportlab drawing of a paginated execution report.

The renderer only draws what the layout already placed; it never moves
a block. Coordinates follow PDF convention (origin bottom-left), so a
block's ``top`` is the y of its upper edge.
"""

import io

from loguru import logger
from PIL import Image
from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from pmtracker.domain.errors import PhotoFetchError
from pmtracker.domain.ports.report_renderer_port import ReportRendererPort
from pmtracker.domain.services.report_layout import (
    BOX_PADDING,
    CAPTION_SIZE,
    LINE_GAP,
    PHOTO_LABEL_HEIGHT,
    SUBTITLE_SIZE,
    TASK_BODY_SIZE,
    TASK_HEADER_SIZE,
    TEXT_SIZE,
    THUMB_GAP,
    THUMB_HEIGHT,
    THUMB_WIDTH,
    TITLE_SIZE,
    HeaderBlock,
    HeadingBlock,
    PageGeometry,
    PhotoCell,
    PhotoRowBlock,
    PlacedBlock,
    ReportLayout,
    SummaryBlock,
    TaskBlock,
    Tone,
)
from pmtracker.domain.services.text_sanitizer import sanitize_for_pdf, wrap_text

FONT = "Helvetica"
FONT_B = "Helvetica-Bold"

TEXT_CLR = colors.HexColor("#1A1A1A")
MUTED_CLR = colors.HexColor("#4D4D4D")
ERROR_CLR = colors.HexColor("#990000")
FLAG_CLR = colors.HexColor("#B35900")

# (border, fill)
TONE_COLORS = {
    Tone.FLAGGED: (colors.HexColor("#E67300"), colors.HexColor("#FFF2E0")),
    Tone.PASSED: (colors.HexColor("#2E8B2E"), colors.HexColor("#EDF8ED")),
    Tone.FAILED: (colors.HexColor("#C0392B"), colors.HexColor("#FBECEC")),
    Tone.NEUTRAL: (colors.HexColor("#9A9A9A"), colors.HexColor("#F5F5F5")),
}

# (label, fill, text)
SUMMARY_BOXES = (
    ("OK", colors.HexColor("#D1FFD1"), colors.HexColor("#006600")),
    ("NOT OK", colors.HexColor("#FFCCCC"), colors.HexColor("#800000")),
    ("NEEDS REVIEW", colors.HexColor("#FFE6B3"), colors.HexColor("#804000")),
)
SUMMARY_BOX_GAP = 10.0

# DecompressionBombError is not an OSError
_EMBED_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


class ReportLabRenderer(ReportRendererPort):
    def check_image(self, data: bytes) -> None:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
        except _EMBED_ERRORS as e:
            raise PhotoFetchError(f"undecodable image: {e}") from e

    def render(self, layout: ReportLayout) -> bytes:
        page = layout.page
        buf = io.BytesIO()
        c = Canvas(buf, pagesize=(page.width, page.height))
        c.setTitle("PM Execution Report")

        for page_index in range(layout.page_count):
            for placed in layout.blocks_on_page(page_index):
                self._draw(c, placed, page)
            self._footer(c, page, page_index, layout.page_count)
            c.showPage()

        c.save()
        return buf.getvalue()

    def _draw(self, c: Canvas, placed: PlacedBlock, page: PageGeometry) -> None:
        block = placed.block
        if isinstance(block, HeaderBlock):
            self._header(c, block, placed.top, page)
        elif isinstance(block, SummaryBlock):
            self._summary(c, block, placed.top, page)
        elif isinstance(block, HeadingBlock):
            c.setFillColor(TEXT_CLR)
            c.setFont(FONT_B, block.size)
            c.drawString(page.margin, placed.top - block.size, block.text)
        elif isinstance(block, TaskBlock):
            self._task(c, block, placed.top, page)
        elif isinstance(block, PhotoRowBlock):
            self._photo_row(c, block, placed.top, page)

    def _header(self, c: Canvas, block: HeaderBlock, top: float, page: PageGeometry) -> None:
        x = page.margin
        y = top
        lines = (
            (block.title, FONT_B, TITLE_SIZE),
            *((line, FONT, TITLE_SIZE) for line in block.pm_lines),
            (block.team_line, FONT, SUBTITLE_SIZE),
            (block.time_line, FONT, TEXT_SIZE),
            (block.duration_line, FONT, TEXT_SIZE),
        )
        c.setFillColor(TEXT_CLR)
        for text, font, size in lines:
            y -= size
            c.setFont(font, size)
            c.drawString(x, y, text)
            y -= LINE_GAP

    def _summary(self, c: Canvas, block: SummaryBlock, top: float, page: PageGeometry) -> None:
        box_w = (page.content_width - 2 * SUMMARY_BOX_GAP) / 3
        values = (
            f"{block.passed}/{block.total}",
            f"{block.failed}/{block.total}",
            f"{block.flagged}/{block.total}",
        )
        for i, ((label, fill, text_clr), value) in enumerate(zip(SUMMARY_BOXES, values)):
            x = page.margin + i * (box_w + SUMMARY_BOX_GAP)
            c.setFillColor(fill)
            c.rect(x, top - block.height, box_w, block.height, stroke=0, fill=1)
            c.setFillColor(text_clr)
            c.setFont(FONT_B, 9)
            c.drawString(x + 10, top - 14, label)
            c.setFont(FONT_B, 12)
            c.drawString(x + 10, top - 28, value)

    def _task(self, c: Canvas, block: TaskBlock, top: float, page: PageGeometry) -> None:
        border, fill = TONE_COLORS[block.tone]
        c.saveState()
        c.setStrokeColor(border)
        c.setFillColor(fill)
        c.setLineWidth(1.2 if block.tone == Tone.FLAGGED else 0.8)
        c.rect(page.margin, top - block.height, page.content_width, block.height, stroke=1, fill=1)
        c.restoreState()

        x = page.margin + BOX_PADDING
        y = top - BOX_PADDING
        c.setFillColor(TEXT_CLR)
        c.setFont(FONT_B, TASK_HEADER_SIZE)
        for line in block.header_lines:
            y -= TASK_HEADER_SIZE
            c.drawString(x, y, line)
            y -= LINE_GAP

        for i, line in enumerate(block.lines):
            y -= TASK_BODY_SIZE
            if i == block.flag_line_index:
                c.setFillColor(FLAG_CLR)
                c.setFont(FONT_B, TASK_BODY_SIZE)
            else:
                c.setFillColor(TEXT_CLR)
                c.setFont(FONT, TASK_BODY_SIZE)
            c.drawString(x, y, line)
            y -= LINE_GAP

    def _photo_row(self, c: Canvas, block: PhotoRowBlock, top: float, page: PageGeometry) -> None:
        c.setFillColor(MUTED_CLR)
        c.setFont(FONT, 9)
        c.drawString(page.margin, top - 9, "Evidence:")

        img_y = top - PHOTO_LABEL_HEIGHT - THUMB_HEIGHT
        for i, cell in enumerate(block.cells):
            x = page.margin + i * (THUMB_WIDTH + THUMB_GAP)
            error = cell.error
            if error is None and cell.image is not None:
                try:
                    c.drawImage(
                        ImageReader(io.BytesIO(cell.image)),
                        x,
                        img_y,
                        width=THUMB_WIDTH,
                        height=THUMB_HEIGHT,
                        mask="auto",
                    )
                except _EMBED_ERRORS as e:
                    logger.warning("Could not draw photo {}: {}", cell.ref, e)
                    error = f"Could not embed photo: {e}"
            elif error is None:
                error = "Could not embed photo: no image data"

            if error is not None:
                self._photo_error(c, cell, error, x, img_y)

            c.setFillColor(MUTED_CLR)
            c.setFont(FONT, CAPTION_SIZE)
            c.drawString(x, img_y - 12, cell.caption)

    def _photo_error(self, c: Canvas, cell: PhotoCell, error: str, x: float, y: float) -> None:
        c.saveState()
        c.setStrokeColor(ERROR_CLR)
        c.setDash(3, 2)
        c.rect(x, y, THUMB_WIDTH, THUMB_HEIGHT, stroke=1, fill=0)
        c.restoreState()

        c.setFillColor(ERROR_CLR)
        c.setFont(FONT, 8)
        text_y = y + THUMB_HEIGHT - 14
        for line in wrap_text(sanitize_for_pdf(error), THUMB_WIDTH - 8, 8)[:8]:
            c.drawString(x + 4, text_y, line)
            text_y -= 10

    def _footer(self, c: Canvas, page: PageGeometry, page_index: int, page_count: int) -> None:
        c.setFillColor(MUTED_CLR)
        c.setFont(FONT, 8)
        c.drawRightString(
            page.width - page.margin,
            page.margin / 2,
            f"Page {page_index + 1} / {page_count}",
        )
