from loguru import logger

from pmtracker.application.dto.pm_list_item import PMListItem
from pmtracker.domain.ports.pm_repo_port import PMRepoPort
from pmtracker.domain.ports.template_repo_port import TemplateRepoPort
from pmtracker.domain.value_objects import PMFilter


class ListPMs:
    """PMs visible under a filter, newest upload first."""

    def __init__(self, pm_repo: PMRepoPort, template_repo: TemplateRepoPort) -> None:
        self.pm_repo = pm_repo
        self.template_repo = template_repo

    async def execute(self, pm_filter: PMFilter | None = None) -> list[PMListItem]:
        pm_filter = pm_filter or PMFilter()
        pms = [
            pm
            for pm in await self.pm_repo.list()
            if pm_filter.matches(pm.owner, pm.status, pm.pm_type, pm.active)
        ]
        pms.sort(key=lambda pm: pm.uploaded_at, reverse=True)

        items: list[PMListItem] = []
        for pm in pms:
            template = await self.template_repo.get_for_pm(pm.id)
            items.append(
                PMListItem(
                    pm_id=pm.id,
                    file_name=pm.file_name,
                    file_ref=pm.file_ref,
                    owner=pm.owner,
                    pm_type=pm.pm_type,
                    status=pm.status,
                    active=pm.active,
                    uploaded_at=pm.uploaded_at,
                    template_id=template.id if template else None,
                    pm_number=template.pm_number if template else None,
                    pm_name=template.name if template else None,
                    asset_code=template.asset_code if template else None,
                    location=template.location if template else None,
                    task_count=len(template.tasks) if template else 0,
                    last_execution_id=pm.last_execution_id,
                    last_report_ref=pm.last_report_ref,
                    last_executed_at=pm.last_executed_at,
                )
            )

        logger.debug(f"Listed {len(items)} PMs with filter {pm_filter}")
        return items
