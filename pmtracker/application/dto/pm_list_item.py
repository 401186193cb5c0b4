from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from pmtracker.domain.value_objects import PMStatus


class PMListItem(BaseModel):
    pm_id: UUID
    file_name: str
    file_ref: str | None
    owner: str
    pm_type: str
    status: PMStatus
    active: bool
    uploaded_at: datetime
    template_id: UUID | None = None
    pm_number: str | None = None
    pm_name: str | None = None
    asset_code: str | None = None
    location: str | None = None
    task_count: int = 0
    last_execution_id: UUID | None = None
    last_report_ref: str | None = None
    last_executed_at: datetime | None = None

    @property
    def has_template(self) -> bool:
        return self.template_id is not None
