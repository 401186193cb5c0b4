from datetime import UTC, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from pmtracker.domain.errors import InvalidTransitionError
from pmtracker.domain.value_objects import PMStatus, is_review_transition


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PMRecord(BaseModel):
    """An uploaded PM checklist document and its lifecycle status."""

    id: UUID
    file_name: str
    file_ref: str | None = None
    owner: str = ""
    pm_type: str = ""
    status: PMStatus = PMStatus.OPEN
    active: bool = True
    uploaded_by: str = "admin"
    uploaded_at: datetime = Field(default_factory=_utc_now)
    template_id: UUID | None = None
    last_execution_id: UUID | None = None
    last_report_ref: str | None = None
    last_executed_at: datetime | None = None

    def review_transition(self, requested: PMStatus) -> None:
        """Apply a reviewer-requested status change (close or reopen)."""
        if not is_review_transition(self.status, requested):
            raise InvalidTransitionError(self.status, requested)
        self.status = requested

    def record_execution(self, execution_id: UUID, finished_at: datetime) -> None:
        """Mark the PM completed after an execution was persisted."""
        self.status = PMStatus.COMPLETED
        self.last_execution_id = execution_id
        self.last_executed_at = finished_at
        self.last_report_ref = None

    def record_report(self, execution_id: UUID, report_ref: str) -> None:
        if self.last_execution_id == execution_id:
            self.last_report_ref = report_ref

    def deactivate(self) -> None:
        self.active = False
