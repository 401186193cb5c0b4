from pathlib import PurePosixPath
from uuid import UUID

from pydantic import BaseModel, field_validator

from pmtracker.domain.entities.checklist_task import ChecklistTask


class ChecklistTemplate(BaseModel, frozen=True):
    """Ordered checklist parsed from an uploaded PM document."""

    id: UUID
    pm_id: UUID
    pm_number: str
    name: str
    asset_code: str | None = None
    location: str | None = None
    source_file_name: str | None = None
    tasks: tuple[ChecklistTask, ...] = ()

    @field_validator("tasks")
    @classmethod
    def _sort_by_order(cls, v: tuple[ChecklistTask, ...]) -> tuple[ChecklistTask, ...]:
        return tuple(sorted(v, key=lambda t: t.order))

    def task_by_id(self, task_id: UUID) -> ChecklistTask | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    @property
    def report_base_name(self) -> str:
        """Source file name without extension, else PM number, else 'PM'."""
        if self.source_file_name:
            return PurePosixPath(self.source_file_name).stem
        return self.pm_number or "PM"
