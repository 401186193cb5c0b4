from uuid import UUID, uuid4

from loguru import logger

from pmtracker.application.dto.template_payload import ParsedTask, TemplatePayload
from pmtracker.domain.entities.checklist_task import ChecklistTask
from pmtracker.domain.entities.checklist_template import ChecklistTemplate
from pmtracker.domain.errors import ValidationError
from pmtracker.domain.ports.pm_repo_port import PMRepoPort
from pmtracker.domain.ports.template_repo_port import TemplateRepoPort


def _has_integer_sequence(task: ParsedTask) -> bool:
    n = task.sequence_number
    if isinstance(n, bool):
        return False
    return isinstance(n, int) or (isinstance(n, float) and n.is_integer())


class ImportTemplate:
    """Create the checklist template of a PM from an extracted payload.

    Importing twice is a no-op: a PM that already has a template with
    tasks keeps it.
    """

    def __init__(self, pm_repo: PMRepoPort, template_repo: TemplateRepoPort) -> None:
        self.pm_repo = pm_repo
        self.template_repo = template_repo

    async def execute(self, pm_id: UUID, payload: TemplatePayload) -> ChecklistTemplate:
        pm = await self.pm_repo.get(pm_id)

        existing = await self.template_repo.get_for_pm(pm_id)
        if existing is not None and existing.tasks:
            logger.info(f"PM {pm_id} already has template {existing.id}; keeping it")
            return existing

        tasks = [
            ChecklistTask(
                id=uuid4(),
                sequence_number=int(t.sequence_number),  # type: ignore[arg-type]
                order=position,
                title=(t.title or "").strip(),
                key_points=(t.key_points or "").strip(),
                rationale=(t.rationale or "").strip(),
                has_reference_image=t.has_reference_image is True,
            )
            for position, t in enumerate(
                (t for t in payload.tasks if _has_integer_sequence(t)), start=1
            )
        ]
        if not tasks:
            raise ValidationError(f"No checklist tasks could be extracted for PM {pm_id}")

        template = ChecklistTemplate(
            id=uuid4(),
            pm_id=pm.id,
            pm_number=(payload.pm_number or "").strip() or pm.file_name,
            name=(payload.name or "").strip() or pm.file_name,
            asset_code=payload.asset_code,
            location=payload.location,
            source_file_name=pm.file_name,
            tasks=tuple(tasks),
        )
        await self.template_repo.save(template)

        pm.template_id = template.id
        await self.pm_repo.save(pm)

        dropped = len(payload.tasks) - len(tasks)
        logger.info(
            f"Imported template {template.id} for PM {pm_id}: {len(tasks)} tasks"
            + (f", {dropped} rows dropped" if dropped else "")
        )
        return template
