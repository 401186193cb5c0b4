import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from pmtracker.application.services.report_compiler import ReportCompiler
from pmtracker.domain.entities.checklist_template import ChecklistTemplate
from pmtracker.domain.entities.execution import Execution
from pmtracker.domain.errors import PhotoFetchError, ValidationError
from pmtracker.domain.ports.image_fetcher_port import ImageFetcherPort
from pmtracker.domain.ports.report_renderer_port import ReportRendererPort
from pmtracker.domain.services.execution_wizard import ExecutionWizard
from pmtracker.domain.services.report_layout import (
    HeaderBlock,
    PhotoRowBlock,
    ReportLayout,
    SummaryBlock,
    TaskBlock,
)
from pmtracker.domain.value_objects import ResultStatus, Team
from pmtracker.infrastructure.reporting.pdf_renderer import ReportLabRenderer

STARTED = datetime(2025, 3, 10, 8, 0, tzinfo=UTC)


@pytest.fixture
def renderer() -> MagicMock:
    renderer = MagicMock(spec=ReportRendererPort)
    renderer.render.return_value = b"%PDF-1.4 fake"
    return renderer


@pytest.fixture
def fetcher(png_bytes: bytes) -> AsyncMock:
    fetcher = AsyncMock(spec=ImageFetcherPort)
    fetcher.fetch.return_value = png_bytes
    return fetcher


def _execution(
    template: ChecklistTemplate, team: Team, photos: dict[int, list[str]] | None = None
) -> Execution:
    wizard = ExecutionWizard(template)
    for i in range(len(wizard)):
        wizard.set_result(i, ResultStatus.PASSED)
        for ref in (photos or {}).get(i, []):
            wizard.add_photo(i, ref)
    return wizard.finalize(team, STARTED, STARTED + timedelta(minutes=45))


def _rendered_layout(renderer: MagicMock) -> ReportLayout:
    return renderer.render.call_args.args[0]


class TestCompile:
    async def test_builds_report(
        self,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
        fetcher: AsyncMock,
        renderer: MagicMock,
    ) -> None:
        template = make_template(3)
        execution = _execution(template, team, {0: ["file:///a.png", "file:///b.png"]})

        report = await ReportCompiler(fetcher, renderer).compile(execution, template)

        assert report.content == b"%PDF-1.4 fake"
        assert report.filename == "EXEC_PM-0042_Compresor_GL(Marta)_A1(Ana_Perez)_A2(Luis).pdf"
        assert report.page_count == _rendered_layout(renderer).page_count
        assert report.photo_failures == []

        blocks = [p.block for p in _rendered_layout(renderer).placed]
        assert isinstance(blocks[0], HeaderBlock)
        assert isinstance(blocks[1], SummaryBlock)
        assert sum(isinstance(b, TaskBlock) for b in blocks) == 3
        rows = [b for b in blocks if isinstance(b, PhotoRowBlock)]
        assert len(rows) == 1
        assert [c.ref for c in rows[0].cells] == ["file:///a.png", "file:///b.png"]

    async def test_photos_fetched_sequentially_in_order(
        self,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
        fetcher: AsyncMock,
        renderer: MagicMock,
    ) -> None:
        template = make_template(2)
        execution = _execution(template, team, {0: ["r1", "r2"], 1: ["r3"]})

        await ReportCompiler(fetcher, renderer).compile(execution, template)

        assert [c.args[0] for c in fetcher.fetch.call_args_list] == ["r1", "r2", "r3"]

    async def test_failed_photo_is_contained(
        self,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
        fetcher: AsyncMock,
        renderer: MagicMock,
        png_bytes: bytes,
    ) -> None:
        async def fetch(ref: str) -> bytes:
            if ref == "missing":
                raise PhotoFetchError("HTTP 404 for missing")
            return png_bytes

        fetcher.fetch.side_effect = fetch
        template = make_template(4)
        execution = _execution(template, team, {1: ["ok-1", "missing", "ok-2"]})

        report = await ReportCompiler(fetcher, renderer).compile(execution, template)

        assert [f.ref for f in report.photo_failures] == ["missing"]
        blocks = [p.block for p in _rendered_layout(renderer).placed]
        assert sum(isinstance(b, TaskBlock) for b in blocks) == 4
        cells = [c for b in blocks if isinstance(b, PhotoRowBlock) for c in b.cells]
        assert [c.ref for c in cells] == ["ok-1", "missing", "ok-2"]
        assert cells[1].image is None
        assert "HTTP 404" in (cells[1].error or "")
        assert cells[0].error is None and cells[2].error is None

    async def test_fetch_timeout_is_contained(
        self,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
        fetcher: AsyncMock,
        renderer: MagicMock,
    ) -> None:
        async def slow(ref: str) -> bytes:
            await asyncio.sleep(5)
            return b""

        fetcher.fetch.side_effect = slow
        template = make_template(1)
        execution = _execution(template, team, {0: ["slow"]})

        report = await ReportCompiler(fetcher, renderer, fetch_timeout_s=0.01).compile(
            execution, template
        )

        assert len(report.photo_failures) == 1
        assert "timed out" in report.photo_failures[0].reason

    async def test_unsupported_and_undecodable_images(
        self,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
        fetcher: AsyncMock,
        renderer: MagicMock,
        png_bytes: bytes,
    ) -> None:
        async def fetch(ref: str) -> bytes:
            return b"GIF89a-not-supported" if ref == "gif" else png_bytes

        def check_image(data: bytes) -> None:
            if data == png_bytes and renderer.check_image.call_count == 1:
                raise PhotoFetchError("undecodable image: truncated")

        fetcher.fetch.side_effect = fetch
        renderer.check_image.side_effect = check_image
        template = make_template(1)
        execution = _execution(template, team, {0: ["broken", "gif", "good"]})

        report = await ReportCompiler(fetcher, renderer).compile(execution, template)

        reasons = {f.ref: f.reason for f in report.photo_failures}
        assert set(reasons) == {"broken", "gif"}
        assert "undecodable" in reasons["broken"]
        assert "unsupported format" in reasons["gif"]

    async def test_oversized_image_is_contained(
        self,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
        fetcher: AsyncMock,
        png_bytes: bytes,
        oversized_png: bytes,
    ) -> None:
        fetcher.fetch.side_effect = lambda ref: oversized_png if ref == "huge" else png_bytes
        template = make_template(2)
        execution = _execution(template, team, {0: ["huge", "good"]})

        report = await ReportCompiler(fetcher, ReportLabRenderer()).compile(execution, template)

        assert report.content.startswith(b"%PDF")
        assert [f.ref for f in report.photo_failures] == ["huge"]
        assert "undecodable" in report.photo_failures[0].reason

    async def test_unexpected_fetch_error_is_contained(
        self,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
        fetcher: AsyncMock,
        renderer: MagicMock,
    ) -> None:
        fetcher.fetch.side_effect = RuntimeError("connection pool closed")
        template = make_template(1)
        execution = _execution(template, team, {0: ["a.png"]})

        report = await ReportCompiler(fetcher, renderer).compile(execution, template)

        assert len(report.photo_failures) == 1
        assert "RuntimeError: connection pool closed" in report.photo_failures[0].reason
        renderer.render.assert_called_once()


class TestCompileValidation:
    async def test_execution_without_results_is_rejected(
        self,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
        fetcher: AsyncMock,
        renderer: MagicMock,
    ) -> None:
        template = make_template(1)
        execution = Execution(
            id=uuid4(),
            template_id=template.id,
            pm_id=template.pm_id,
            team=team,
            started_at=STARTED,
            finished_at=STARTED,
            results=(),
        )

        with pytest.raises(ValidationError):
            await ReportCompiler(fetcher, renderer).compile(execution, template)
        renderer.render.assert_not_called()

    async def test_template_mismatch_is_rejected(
        self,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
        fetcher: AsyncMock,
        renderer: MagicMock,
    ) -> None:
        execution = _execution(make_template(1), team)

        with pytest.raises(ValidationError):
            await ReportCompiler(fetcher, renderer).compile(execution, make_template(1))
