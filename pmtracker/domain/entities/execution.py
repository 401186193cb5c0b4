from datetime import datetime, timedelta
from uuid import UUID

from pydantic import BaseModel, model_validator

from pmtracker.domain.entities.task_result import RecordedResult
from pmtracker.domain.value_objects import ResultStatus, Team

MS_PER_MINUTE = 60_000
_ONE_MS = timedelta(milliseconds=1)


class ExecutionSummary(BaseModel, frozen=True):
    total: int
    passed: int
    failed: int
    flagged: int


class Execution(BaseModel, frozen=True):
    """One completed run of a checklist template.

    Immutable once created. The only allowed change is attaching the
    compiled report location, which yields a new instance.
    """

    id: UUID
    template_id: UUID
    pm_id: UUID
    team: Team
    started_at: datetime
    finished_at: datetime
    results: tuple[RecordedResult, ...]
    report_ref: str | None = None

    @model_validator(mode="after")
    def _check_time_order(self) -> "Execution":
        if self.finished_at < self.started_at:
            raise ValueError("finished_at must not be earlier than started_at")
        return self

    @property
    def duration_ms(self) -> int:
        return (self.finished_at - self.started_at) // _ONE_MS

    @property
    def duration_minutes(self) -> int:
        return self.duration_ms // MS_PER_MINUTE

    def summary(self) -> ExecutionSummary:
        return ExecutionSummary(
            total=len(self.results),
            passed=sum(1 for r in self.results if r.status == ResultStatus.PASSED),
            failed=sum(1 for r in self.results if r.status == ResultStatus.FAILED),
            flagged=sum(1 for r in self.results if r.flagged),
        )

    def attach_report(self, report_ref: str) -> "Execution":
        return self.model_copy(update={"report_ref": report_ref})
