"""Measurement-task heuristic.

Checklist documents do not declare which steps need a recorded reading,
so the need is inferred from the step text. Misclassification is possible
and accepted; the keyword set is fixed.
"""

from pmtracker.domain.entities.checklist_task import ChecklistTask
from pmtracker.domain.value_objects import TaskKind

MEASUREMENT_KEYWORDS: tuple[str, ...] = (
    "mm",
    "milimetro",
    "milímetro",
    "temperatura",
    "temperature",
    "°c",
    "porcentaje",
    "%",
    "distancia",
    "espesor",
    "espesores",
    "gap",
    "altura",
    "velocidad",
    "rpm",
    "presión",
    "pressure",
    "voltage",
    "voltaje",
    "amp",
    "amper",
    "amperaje",
)


def classify(task: ChecklistTask) -> TaskKind:
    text = task.combined_text.lower()
    if any(keyword in text for keyword in MEASUREMENT_KEYWORDS):
        return TaskKind.MEASUREMENT
    return TaskKind.STANDARD


def is_measurement_task(task: ChecklistTask) -> bool:
    return classify(task) == TaskKind.MEASUREMENT
