from pmtracker.domain.value_objects.image_format import (
    ImageFormat,
    detect_image_format,
    format_for_content_type,
)
from pmtracker.domain.value_objects.pm_filter import PMFilter
from pmtracker.domain.value_objects.pm_status import (
    REVIEW_TRANSITIONS,
    PMStatus,
    is_review_transition,
)
from pmtracker.domain.value_objects.result_status import ResultStatus
from pmtracker.domain.value_objects.task_kind import TaskKind
from pmtracker.domain.value_objects.team import Team

__all__ = [
    "ImageFormat",
    "PMFilter",
    "PMStatus",
    "REVIEW_TRANSITIONS",
    "ResultStatus",
    "TaskKind",
    "Team",
    "detect_image_format",
    "format_for_content_type",
    "is_review_transition",
]
