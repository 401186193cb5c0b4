from uuid import UUID

from pydantic import BaseModel

from pmtracker.application.dto.compiled_report import PhotoFailure
from pmtracker.domain.entities.execution import ExecutionSummary


class FinishResult(BaseModel):
    execution_id: UUID
    report_ref: str
    report_filename: str
    page_count: int
    duration_minutes: int
    summary: ExecutionSummary
    photo_failures: list[PhotoFailure] = []
