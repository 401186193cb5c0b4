from pmtracker.domain.entities.checklist_task import ChecklistTask
from pmtracker.domain.entities.checklist_template import ChecklistTemplate
from pmtracker.domain.entities.execution import Execution, ExecutionSummary
from pmtracker.domain.entities.pm_record import PMRecord
from pmtracker.domain.entities.task_result import RecordedResult, TaskResult

__all__ = [
    "ChecklistTask",
    "ChecklistTemplate",
    "Execution",
    "ExecutionSummary",
    "PMRecord",
    "RecordedResult",
    "TaskResult",
]
