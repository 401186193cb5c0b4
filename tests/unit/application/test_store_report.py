import asyncio
from collections.abc import Callable
from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from pmtracker.application.dto.compiled_report import CompiledReport
from pmtracker.application.services.report_compiler import ReportCompiler
from pmtracker.application.use_cases.regenerate_report import RegenerateReport
from pmtracker.application.use_cases.store_report import StoreReport
from pmtracker.domain.entities.checklist_template import ChecklistTemplate
from pmtracker.domain.entities.execution import Execution
from pmtracker.domain.entities.pm_record import PMRecord
from pmtracker.domain.errors import NotFoundError, StorageError
from pmtracker.domain.ports.blob_store_port import ReportStorePort
from pmtracker.domain.ports.execution_repo_port import ExecutionRepoPort
from pmtracker.domain.ports.pm_repo_port import PMRepoPort
from pmtracker.domain.ports.template_repo_port import TemplateRepoPort
from pmtracker.domain.services.execution_wizard import ExecutionWizard
from pmtracker.domain.value_objects import ResultStatus, Team

REPORT = CompiledReport(content=b"%PDF-1.4", filename="EXEC_PM_GL(M)_A1(A).pdf", page_count=2)


def _execution(template: ChecklistTemplate, team: Team) -> Execution:
    wizard = ExecutionWizard(template)
    wizard.set_result(0, ResultStatus.PASSED)
    return wizard.finalize(team, wizard.started_at, wizard.started_at + timedelta(minutes=3))


@pytest.fixture
def execution(make_template: Callable[..., ChecklistTemplate], team: Team) -> Execution:
    return _execution(make_template(1), team)


@pytest.fixture
def execution_repo(execution: Execution) -> AsyncMock:
    repo = AsyncMock(spec=ExecutionRepoPort)
    repo.get.return_value = execution
    repo.attach_report.side_effect = lambda _id, ref: execution.attach_report(ref)
    return repo


@pytest.fixture
def pm(execution: Execution) -> PMRecord:
    pm = PMRecord(id=execution.pm_id, file_name="pm.pdf")
    pm.record_execution(execution.id, execution.finished_at)
    return pm


@pytest.fixture
def pm_repo(pm: PMRecord) -> AsyncMock:
    repo = AsyncMock(spec=PMRepoPort)
    repo.get.return_value = pm
    return repo


@pytest.fixture
def report_store() -> AsyncMock:
    store = AsyncMock(spec=ReportStorePort)
    store.store.return_value = "file:///blobs/reports/r.pdf"
    return store


class TestStoreReport:
    async def test_stores_and_links_report(
        self,
        execution: Execution,
        execution_repo: AsyncMock,
        pm_repo: AsyncMock,
        pm: PMRecord,
        report_store: AsyncMock,
    ) -> None:
        ref = await StoreReport(report_store, execution_repo, pm_repo).execute(
            execution.id, REPORT
        )

        assert ref == "file:///blobs/reports/r.pdf"
        report_store.store.assert_awaited_once_with(REPORT.content, REPORT.filename)
        execution_repo.attach_report.assert_awaited_once_with(execution.id, ref)
        assert pm.last_report_ref == ref
        pm_repo.save.assert_awaited_once_with(pm)

    async def test_timeout_is_storage_error(
        self,
        execution: Execution,
        execution_repo: AsyncMock,
        pm_repo: AsyncMock,
        report_store: AsyncMock,
    ) -> None:
        async def slow(*args: object) -> str:
            await asyncio.sleep(5)
            return "never"

        report_store.store.side_effect = slow

        with pytest.raises(StorageError):
            await StoreReport(report_store, execution_repo, pm_repo, timeout_s=0.01).execute(
                execution.id, REPORT
            )
        execution_repo.attach_report.assert_not_called()

    async def test_retry_after_failure_succeeds(
        self,
        execution: Execution,
        execution_repo: AsyncMock,
        pm_repo: AsyncMock,
        report_store: AsyncMock,
    ) -> None:
        report_store.store.side_effect = [StorageError("busy"), "file:///r2.pdf"]
        use_case = StoreReport(report_store, execution_repo, pm_repo)

        with pytest.raises(StorageError):
            await use_case.execute(execution.id, REPORT)
        assert await use_case.execute(execution.id, REPORT) == "file:///r2.pdf"


class TestRegenerateReport:
    async def test_recompiles_and_stores(
        self,
        make_template: Callable[..., ChecklistTemplate],
        team: Team,
        pm_repo: AsyncMock,
        report_store: AsyncMock,
    ) -> None:
        template = make_template(1)
        execution = _execution(template, team)
        execution_repo = AsyncMock(spec=ExecutionRepoPort)
        execution_repo.get.return_value = execution
        execution_repo.attach_report.side_effect = lambda _id, ref: execution.attach_report(ref)
        template_repo = AsyncMock(spec=TemplateRepoPort)
        template_repo.get.return_value = template
        compiler = AsyncMock(spec=ReportCompiler)
        compiler.compile.return_value = REPORT
        pm_repo.get.return_value = PMRecord(id=execution.pm_id, file_name="pm.pdf")

        store_report = StoreReport(report_store, execution_repo, pm_repo)
        ref, report = await RegenerateReport(
            execution_repo, template_repo, compiler, store_report
        ).execute(execution.id)

        assert ref == "file:///blobs/reports/r.pdf"
        assert report == REPORT
        template_repo.get.assert_awaited_once_with(execution.template_id)
        compiler.compile.assert_awaited_once_with(execution, template)

    async def test_unknown_execution(self, report_store: AsyncMock) -> None:
        execution_repo = AsyncMock(spec=ExecutionRepoPort)
        execution_repo.get.side_effect = NotFoundError("Execution", "x")
        compiler = AsyncMock(spec=ReportCompiler)
        store_report = StoreReport(report_store, execution_repo, AsyncMock(spec=PMRepoPort))

        with pytest.raises(NotFoundError):
            await RegenerateReport(
                execution_repo, AsyncMock(spec=TemplateRepoPort), compiler, store_report
            ).execute(uuid4())
        compiler.compile.assert_not_called()
