from pmtracker.domain.services.execution_wizard import ExecutionWizard, WizardProgress
from pmtracker.domain.services.report_layout import (
    PageGeometry,
    Placement,
    ReportLayout,
    paginate,
    place,
)
from pmtracker.domain.services.task_classifier import (
    MEASUREMENT_KEYWORDS,
    classify,
    is_measurement_task,
)
from pmtracker.domain.services.text_sanitizer import (
    build_report_filename,
    sanitize_for_filename,
    sanitize_for_pdf,
)

__all__ = [
    "ExecutionWizard",
    "MEASUREMENT_KEYWORDS",
    "PageGeometry",
    "Placement",
    "ReportLayout",
    "WizardProgress",
    "build_report_filename",
    "classify",
    "is_measurement_task",
    "paginate",
    "place",
    "sanitize_for_filename",
    "sanitize_for_pdf",
]
