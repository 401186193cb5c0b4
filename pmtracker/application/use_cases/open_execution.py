from uuid import UUID

from loguru import logger

from pmtracker.domain.errors import NotFoundError
from pmtracker.domain.ports.pm_repo_port import PMRepoPort
from pmtracker.domain.ports.template_repo_port import TemplateRepoPort
from pmtracker.domain.services.execution_wizard import ExecutionWizard


class OpenExecution:
    """Start a technician session for a PM's checklist."""

    def __init__(self, pm_repo: PMRepoPort, template_repo: TemplateRepoPort) -> None:
        self.pm_repo = pm_repo
        self.template_repo = template_repo

    async def execute(self, pm_id: UUID) -> ExecutionWizard:
        pm = await self.pm_repo.get(pm_id)
        if not pm.active:
            raise NotFoundError("PM", pm_id)
        if pm.template_id is None:
            raise NotFoundError("Template for PM", pm_id)

        template = await self.template_repo.get(pm.template_id)
        wizard = ExecutionWizard(template)
        logger.info(f"Opened execution of PM {pm_id} ({len(wizard)} tasks)")
        return wizard
