from uuid import UUID

from loguru import logger

from pmtracker.domain.entities.pm_record import PMRecord
from pmtracker.domain.ports.pm_repo_port import PMRepoPort


class DeletePM:
    """Soft delete: the PM stays on disk but is hidden from listings."""

    def __init__(self, pm_repo: PMRepoPort) -> None:
        self.pm_repo = pm_repo

    async def execute(self, pm_id: UUID) -> PMRecord:
        pm = await self.pm_repo.get(pm_id)
        pm.deactivate()
        await self.pm_repo.save(pm)
        logger.info(f"Deactivated PM {pm_id}")
        return pm
