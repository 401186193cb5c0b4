from uuid import UUID

from loguru import logger

from pmtracker.domain.entities.pm_record import PMRecord
from pmtracker.domain.ports.pm_repo_port import PMRepoPort
from pmtracker.domain.value_objects import PMStatus


class ChangePMStatus:
    """Reviewer status changes: close a completed PM or reopen a closed one."""

    def __init__(self, pm_repo: PMRepoPort) -> None:
        self.pm_repo = pm_repo

    async def close(self, pm_id: UUID) -> PMRecord:
        return await self.execute(pm_id, PMStatus.CLOSED)

    async def reopen(self, pm_id: UUID) -> PMRecord:
        return await self.execute(pm_id, PMStatus.COMPLETED)

    async def execute(self, pm_id: UUID, requested: PMStatus) -> PMRecord:
        pm = await self.pm_repo.get(pm_id)
        previous = pm.status
        pm.review_transition(requested)
        await self.pm_repo.save(pm)
        logger.info(f"PM {pm_id} moved {previous.value} -> {requested.value}")
        return pm
