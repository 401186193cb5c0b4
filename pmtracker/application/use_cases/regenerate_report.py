from uuid import UUID

from loguru import logger

from pmtracker.application.dto.compiled_report import CompiledReport
from pmtracker.application.services.report_compiler import ReportCompiler
from pmtracker.application.use_cases.store_report import StoreReport
from pmtracker.domain.ports.execution_repo_port import ExecutionRepoPort
from pmtracker.domain.ports.template_repo_port import TemplateRepoPort


class RegenerateReport:
    """Recompile the report of a stored execution and store it again.

    Used when a report is pending after a storage failure and the
    compiled bytes are no longer at hand.
    """

    def __init__(
        self,
        execution_repo: ExecutionRepoPort,
        template_repo: TemplateRepoPort,
        compiler: ReportCompiler,
        store_report: StoreReport,
    ) -> None:
        self.execution_repo = execution_repo
        self.template_repo = template_repo
        self.compiler = compiler
        self.store_report = store_report

    async def execute(self, execution_id: UUID) -> tuple[str, CompiledReport]:
        execution = await self.execution_repo.get(execution_id)
        template = await self.template_repo.get(execution.template_id)

        report = await self.compiler.compile(execution, template)
        ref = await self.store_report.execute(execution_id, report)
        logger.info(f"Regenerated report for execution {execution_id}")
        return ref, report
