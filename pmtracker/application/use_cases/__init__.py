from pmtracker.application.use_cases.change_pm_status import ChangePMStatus
from pmtracker.application.use_cases.delete_pm import DeletePM
from pmtracker.application.use_cases.finish_execution import FinishExecution
from pmtracker.application.use_cases.import_template import ImportTemplate
from pmtracker.application.use_cases.list_pms import ListPMs
from pmtracker.application.use_cases.open_execution import OpenExecution
from pmtracker.application.use_cases.regenerate_report import RegenerateReport
from pmtracker.application.use_cases.register_pm import RegisterPM
from pmtracker.application.use_cases.store_report import StoreReport
from pmtracker.application.use_cases.upload_photo import UploadPhoto

__all__ = [
    "ChangePMStatus",
    "DeletePM",
    "FinishExecution",
    "ImportTemplate",
    "ListPMs",
    "OpenExecution",
    "RegenerateReport",
    "RegisterPM",
    "StoreReport",
    "UploadPhoto",
]
