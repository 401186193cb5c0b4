import asyncio

from loguru import logger

from pmtracker.application.dto.compiled_report import CompiledReport, PhotoFailure
from pmtracker.domain.entities.checklist_template import ChecklistTemplate
from pmtracker.domain.entities.execution import Execution
from pmtracker.domain.errors import PhotoFetchError, ValidationError
from pmtracker.domain.ports.image_fetcher_port import ImageFetcherPort
from pmtracker.domain.ports.report_renderer_port import ReportRendererPort
from pmtracker.domain.services.report_layout import (
    Block,
    HeadingBlock,
    PageGeometry,
    PhotoCell,
    header_block,
    paginate,
    photo_caption,
    photo_rows,
    summary_block,
    task_block,
)
from pmtracker.domain.services.text_sanitizer import build_report_filename
from pmtracker.domain.value_objects import detect_image_format

DEFAULT_FETCH_TIMEOUT_S = 15.0


class ReportCompiler:
    """Turns a finished Execution into a paginated PDF report.

    Photos are fetched one at a time. A photo that cannot be fetched,
    has an unsupported format, or cannot be decoded is reported inline
    and never aborts the report.
    """

    def __init__(
        self,
        image_fetcher: ImageFetcherPort,
        renderer: ReportRendererPort,
        fetch_timeout_s: float = DEFAULT_FETCH_TIMEOUT_S,
        page: PageGeometry | None = None,
    ) -> None:
        self.image_fetcher = image_fetcher
        self.renderer = renderer
        self.fetch_timeout_s = fetch_timeout_s
        self.page = page or PageGeometry()

    async def compile(self, execution: Execution, template: ChecklistTemplate) -> CompiledReport:
        self._validate(execution, template)

        results = {r.task_id: r for r in execution.results}
        failures: list[PhotoFailure] = []

        blocks: list[Block] = [
            header_block(execution, template.pm_number, template.name, self.page),
            summary_block(execution),
            HeadingBlock(text="Task detail:"),
        ]
        for task in template.tasks:
            result = results.get(task.id)
            if result is None:
                continue
            blocks.append(task_block(task, result, self.page))
            if not result.photos:
                continue
            cells: list[PhotoCell] = []
            for ref in result.photos:
                cell = await self._photo_cell(ref)
                if cell.error:
                    failures.append(PhotoFailure(ref=ref, reason=cell.error))
                cells.append(cell)
            blocks.extend(photo_rows(cells))

        layout = paginate(blocks, self.page)
        content = await asyncio.to_thread(self.renderer.render, layout)
        filename = build_report_filename(template.report_base_name, execution.team)

        logger.info(
            "Compiled report {} ({} pages, {} photo failures)",
            filename,
            layout.page_count,
            len(failures),
        )
        return CompiledReport(
            content=content,
            filename=filename,
            page_count=layout.page_count,
            photo_failures=failures,
        )

    def _validate(self, execution: Execution, template: ChecklistTemplate) -> None:
        if not execution.results:
            raise ValidationError(f"Execution {execution.id} has no task results")
        if execution.template_id != template.id:
            raise ValidationError(
                f"Execution {execution.id} belongs to template {execution.template_id}, "
                f"not {template.id}"
            )
        unknown = [r.task_id for r in execution.results if template.task_by_id(r.task_id) is None]
        if unknown:
            raise ValidationError(
                f"Execution {execution.id} references unknown tasks",
                reasons=[str(t) for t in unknown],
            )

    async def _photo_cell(self, ref: str) -> PhotoCell:
        caption = photo_caption(ref)
        try:
            data = await asyncio.wait_for(self.image_fetcher.fetch(ref), self.fetch_timeout_s)
            if detect_image_format(data) is None:
                raise PhotoFetchError("unsupported format (PNG/JPEG only)")
            self.renderer.check_image(data)
        except TimeoutError:
            reason = f"timed out after {self.fetch_timeout_s:g}s"
        except PhotoFetchError as e:
            reason = str(e)
        except Exception as e:
            logger.exception(f"Unexpected error embedding photo {ref}")
            reason = f"{type(e).__name__}: {e}"
        else:
            return PhotoCell(ref=ref, caption=caption, image=data)

        logger.warning("Photo {} not embedded: {}", ref, reason)
        return PhotoCell(ref=ref, caption=caption, error=f"Could not embed photo: {reason}")
