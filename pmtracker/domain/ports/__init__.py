from pmtracker.domain.ports.blob_store_port import (
    DocumentStorePort,
    PhotoStorePort,
    ReportStorePort,
)
from pmtracker.domain.ports.execution_repo_port import ExecutionRepoPort
from pmtracker.domain.ports.image_fetcher_port import ImageFetcherPort
from pmtracker.domain.ports.pm_repo_port import PMRepoPort
from pmtracker.domain.ports.report_renderer_port import ReportRendererPort
from pmtracker.domain.ports.template_repo_port import TemplateRepoPort

__all__ = [
    # Persistence
    "ExecutionRepoPort",
    "PMRepoPort",
    "TemplateRepoPort",
    # Blob storage
    "DocumentStorePort",
    "PhotoStorePort",
    "ReportStorePort",
    # Reporting
    "ImageFetcherPort",
    "ReportRendererPort",
]
