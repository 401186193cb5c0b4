import asyncio
from uuid import UUID

from loguru import logger

from pmtracker.application.dto.compiled_report import CompiledReport
from pmtracker.domain.errors import StorageError
from pmtracker.domain.ports.blob_store_port import ReportStorePort
from pmtracker.domain.ports.execution_repo_port import ExecutionRepoPort
from pmtracker.domain.ports.pm_repo_port import PMRepoPort

DEFAULT_STORAGE_TIMEOUT_S = 60.0


class StoreReport:
    """Store compiled report bytes and link them to their execution.

    Safe to call again with the same report after a StorageError.
    """

    def __init__(
        self,
        report_store: ReportStorePort,
        execution_repo: ExecutionRepoPort,
        pm_repo: PMRepoPort,
        timeout_s: float = DEFAULT_STORAGE_TIMEOUT_S,
    ) -> None:
        self.report_store = report_store
        self.execution_repo = execution_repo
        self.pm_repo = pm_repo
        self.timeout_s = timeout_s

    async def execute(self, execution_id: UUID, report: CompiledReport) -> str:
        try:
            ref = await asyncio.wait_for(
                self.report_store.store(report.content, report.filename),
                self.timeout_s,
            )
        except TimeoutError as e:
            raise StorageError(f"Report storage timed out after {self.timeout_s:g}s") from e

        execution = await self.execution_repo.attach_report(execution_id, ref)
        pm = await self.pm_repo.get(execution.pm_id)
        pm.record_report(execution_id, ref)
        await self.pm_repo.save(pm)

        logger.info(f"Stored report for execution {execution_id}: {ref}")
        return ref
