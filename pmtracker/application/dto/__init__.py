from pmtracker.application.dto.compiled_report import CompiledReport, PhotoFailure
from pmtracker.application.dto.finish_result import FinishResult
from pmtracker.application.dto.pm_list_item import PMListItem
from pmtracker.application.dto.template_payload import ParsedTask, TemplatePayload

__all__ = [
    "CompiledReport",
    "FinishResult",
    "ParsedTask",
    "PMListItem",
    "PhotoFailure",
    "TemplatePayload",
]
