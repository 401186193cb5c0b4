from dataclasses import dataclass

import httpx

from pmtracker.application.services.report_compiler import ReportCompiler
from pmtracker.application.use_cases import (
    ChangePMStatus,
    DeletePM,
    FinishExecution,
    ImportTemplate,
    ListPMs,
    OpenExecution,
    RegenerateReport,
    RegisterPM,
    StoreReport,
    UploadPhoto,
)
from pmtracker.infrastructure.config.settings import TrackerSettings
from pmtracker.infrastructure.fetching.image_fetcher import ImageFetcher
from pmtracker.infrastructure.persistence import (
    JsonExecutionRepo,
    JsonPMRepo,
    JsonTemplateRepo,
)
from pmtracker.infrastructure.persistence._paths import StatePaths
from pmtracker.infrastructure.reporting.pdf_renderer import ReportLabRenderer
from pmtracker.infrastructure.storage.local_blob_store import LocalBlobStore


@dataclass
class Services:
    """Use cases wired to the file-based adapters under one state dir."""

    settings: TrackerSettings
    pm_repo: JsonPMRepo
    template_repo: JsonTemplateRepo
    execution_repo: JsonExecutionRepo
    register_pm: RegisterPM
    import_template: ImportTemplate
    list_pms: ListPMs
    change_status: ChangePMStatus
    delete_pm: DeletePM
    open_execution: OpenExecution
    upload_photo: UploadPhoto
    store_report: StoreReport
    finish_execution: FinishExecution
    regenerate_report: RegenerateReport


def build_services(
    settings: TrackerSettings,
    http_client: httpx.AsyncClient | None = None,
) -> Services:
    paths = StatePaths(settings.state_dir)
    pm_repo = JsonPMRepo(settings.state_dir)
    template_repo = JsonTemplateRepo(settings.state_dir)
    execution_repo = JsonExecutionRepo(settings.state_dir)
    blobs = LocalBlobStore(paths.blobs_dir)

    compiler = ReportCompiler(
        image_fetcher=ImageFetcher(client=http_client, timeout_s=settings.fetch_timeout_s),
        renderer=ReportLabRenderer(),
        fetch_timeout_s=settings.fetch_timeout_s,
    )
    store_report = StoreReport(
        blobs, execution_repo, pm_repo, timeout_s=settings.storage_timeout_s
    )

    return Services(
        settings=settings,
        pm_repo=pm_repo,
        template_repo=template_repo,
        execution_repo=execution_repo,
        register_pm=RegisterPM(pm_repo, blobs, timeout_s=settings.upload_timeout_s),
        import_template=ImportTemplate(pm_repo, template_repo),
        list_pms=ListPMs(pm_repo, template_repo),
        change_status=ChangePMStatus(pm_repo),
        delete_pm=DeletePM(pm_repo),
        open_execution=OpenExecution(pm_repo, template_repo),
        upload_photo=UploadPhoto(blobs, timeout_s=settings.upload_timeout_s),
        store_report=store_report,
        finish_execution=FinishExecution(execution_repo, pm_repo, compiler, store_report),
        regenerate_report=RegenerateReport(execution_repo, template_repo, compiler, store_report),
    )
