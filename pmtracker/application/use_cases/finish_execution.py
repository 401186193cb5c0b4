from datetime import UTC, datetime

from loguru import logger

from pmtracker.application.dto.finish_result import FinishResult
from pmtracker.application.services.report_compiler import ReportCompiler
from pmtracker.application.use_cases.store_report import StoreReport
from pmtracker.domain.errors import ReportStorageFailed, StorageError
from pmtracker.domain.ports.execution_repo_port import ExecutionRepoPort
from pmtracker.domain.ports.pm_repo_port import PMRepoPort
from pmtracker.domain.services.execution_wizard import ExecutionWizard
from pmtracker.domain.value_objects import Team


class FinishExecution:
    """Finalize a session, persist it, then compile and store its report.

    Order matters: invariants are checked before any I/O, the execution is
    persisted before the report is compiled, and a report storage failure
    is raised as ReportStorageFailed so the caller can retry with
    StoreReport. Nothing is retried here.
    """

    def __init__(
        self,
        execution_repo: ExecutionRepoPort,
        pm_repo: PMRepoPort,
        compiler: ReportCompiler,
        store_report: StoreReport,
    ) -> None:
        self.execution_repo = execution_repo
        self.pm_repo = pm_repo
        self.compiler = compiler
        self.store_report = store_report

    async def execute(
        self,
        wizard: ExecutionWizard,
        team: Team,
        finished_at: datetime | None = None,
    ) -> FinishResult:
        execution = wizard.finalize(
            team=team,
            started_at=wizard.started_at,
            finished_at=finished_at or datetime.now(UTC),
        )

        execution_id = await self.execution_repo.save(execution)
        pm = await self.pm_repo.get(execution.pm_id)
        pm.record_execution(execution_id, execution.finished_at)
        await self.pm_repo.save(pm)
        logger.info(f"Execution {execution_id} saved; PM {pm.id} marked {pm.status.value}")

        report = await self.compiler.compile(execution, wizard.template)

        try:
            report_ref = await self.store_report.execute(execution_id, report)
        except StorageError as e:
            logger.error(f"Report storage failed for execution {execution_id}: {e}")
            raise ReportStorageFailed(
                execution_id=execution_id,
                filename=report.filename,
                content=report.content,
                cause=e,
                page_count=report.page_count,
            ) from e

        return FinishResult(
            execution_id=execution_id,
            report_ref=report_ref,
            report_filename=report.filename,
            page_count=report.page_count,
            duration_minutes=execution.duration_minutes,
            summary=execution.summary(),
            photo_failures=report.photo_failures,
        )
