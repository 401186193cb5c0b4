"""Per-session checklist execution state machine.

A wizard owns the TaskResult set of one technician session. Field
mutators are always permitted; completion rules are only enforced when
moving forward (advance) or locking the run into an Execution (finalize).
Nothing here performs I/O.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel

from pmtracker.domain.entities.checklist_task import ChecklistTask
from pmtracker.domain.entities.checklist_template import ChecklistTemplate
from pmtracker.domain.entities.execution import Execution
from pmtracker.domain.entities.task_result import TaskResult, is_blank
from pmtracker.domain.errors import ValidationError
from pmtracker.domain.services.task_classifier import is_measurement_task
from pmtracker.domain.value_objects import ResultStatus, Team


class WizardProgress(BaseModel, frozen=True):
    total: int
    passed: int
    failed: int
    pending: int
    flagged: int


class ExecutionWizard:
    def __init__(self, template: ChecklistTemplate, started_at: datetime | None = None) -> None:
        if not template.tasks:
            raise ValidationError(f"Template {template.id} has no tasks to execute")
        self.template = template
        self.started_at = started_at or datetime.now(UTC)
        self.results: list[TaskResult] = [TaskResult(task_id=t.id) for t in template.tasks]
        self.active_index = 0
        self._measurement = [is_measurement_task(t) for t in template.tasks]

    @property
    def tasks(self) -> tuple[ChecklistTask, ...]:
        return self.template.tasks

    def __len__(self) -> int:
        return len(self.results)

    @property
    def active_task(self) -> ChecklistTask:
        return self.tasks[self.active_index]

    @property
    def active_result(self) -> TaskResult:
        return self.results[self.active_index]

    @property
    def is_last(self) -> bool:
        return self.active_index == len(self.results) - 1

    def result(self, index: int) -> TaskResult:
        if not 0 <= index < len(self.results):
            raise ValidationError(f"Task index {index} out of range (0..{len(self.results) - 1})")
        return self.results[index]

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_result(self, index: int, status: ResultStatus) -> None:
        self.result(index).status = status

    def set_measurement(self, index: int, value: str | None) -> None:
        self.result(index).measurement = value

    def set_comment(self, index: int, text: str) -> None:
        self.result(index).comment = text

    def toggle_flag(self, index: int) -> bool:
        result = self.result(index)
        result.flagged = not result.flagged
        return result.flagged

    def add_photo(self, index: int, ref: str) -> None:
        self.result(index).add_photo(ref)

    def remove_photo(self, index: int, ref: str) -> bool:
        return self.result(index).remove_photo(ref)

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def requires_measurement(self, index: int) -> bool:
        self.result(index)
        return self._measurement[index]

    def blocking_reasons(self, index: int) -> list[str]:
        """Why the task at index cannot be left yet. Empty when it can."""
        result = self.result(index)
        reasons: list[str] = []
        if result.status == ResultStatus.PENDING:
            reasons.append("result not recorded")
        if result.flagged and is_blank(result.comment):
            reasons.append("flagged task needs a comment")
        if result.status == ResultStatus.FAILED and is_blank(result.comment):
            reasons.append("failed task needs a comment")
        if self._measurement[index] and is_blank(result.measurement):
            reasons.append("measurement value required")
        return reasons

    def can_advance(self, index: int | None = None) -> bool:
        return not self.blocking_reasons(self.active_index if index is None else index)

    def can_finalize(self) -> bool:
        return all(self.can_advance(i) for i in range(len(self.results)))

    def incomplete_tasks(self) -> dict[int, list[str]]:
        return {
            i: reasons
            for i in range(len(self.results))
            if (reasons := self.blocking_reasons(i))
        }

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def advance(self) -> int:
        if self.can_advance() and not self.is_last:
            self.active_index += 1
        return self.active_index

    def retreat(self) -> int:
        if self.active_index > 0:
            self.active_index -= 1
        return self.active_index

    def progress(self) -> WizardProgress:
        return WizardProgress(
            total=len(self.results),
            passed=sum(1 for r in self.results if r.status == ResultStatus.PASSED),
            failed=sum(1 for r in self.results if r.status == ResultStatus.FAILED),
            pending=sum(1 for r in self.results if r.status == ResultStatus.PENDING),
            flagged=sum(1 for r in self.results if r.flagged),
        )

    # ------------------------------------------------------------------
    # Finalize
    # ------------------------------------------------------------------

    def finalize(
        self,
        team: Team,
        started_at: datetime,
        finished_at: datetime,
        execution_id: UUID | None = None,
    ) -> Execution:
        """Lock the results into an Execution.

        Does not persist anything or compile the report.
        """
        incomplete = self.incomplete_tasks()
        if incomplete:
            reasons = [
                f"task {self.tasks[i].sequence_number}: {', '.join(r)}"
                for i, r in incomplete.items()
            ]
            raise ValidationError(
                f"{len(incomplete)} task(s) are not complete", reasons=reasons
            )
        if finished_at < started_at:
            raise ValidationError("finished_at must not be earlier than started_at")

        return Execution(
            id=execution_id or uuid4(),
            template_id=self.template.id,
            pm_id=self.template.pm_id,
            team=team,
            started_at=started_at,
            finished_at=finished_at,
            results=tuple(r.freeze() for r in self.results),
        )
