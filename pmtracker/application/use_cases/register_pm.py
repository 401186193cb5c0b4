import asyncio
from uuid import uuid4

from loguru import logger

from pmtracker.domain.entities.pm_record import PMRecord
from pmtracker.domain.errors import UploadError, ValidationError
from pmtracker.domain.ports.blob_store_port import DocumentStorePort
from pmtracker.domain.ports.pm_repo_port import PMRepoPort

PDF_MAGIC = b"%PDF"
DEFAULT_UPLOAD_TIMEOUT_S = 30.0


class RegisterPM:
    """Store an uploaded PM checklist document and open a PM for it."""

    def __init__(
        self,
        pm_repo: PMRepoPort,
        document_store: DocumentStorePort,
        timeout_s: float = DEFAULT_UPLOAD_TIMEOUT_S,
    ) -> None:
        self.pm_repo = pm_repo
        self.document_store = document_store
        self.timeout_s = timeout_s

    async def execute(
        self,
        file_name: str,
        content: bytes,
        owner: str = "",
        pm_type: str = "",
        uploaded_by: str = "admin",
    ) -> PMRecord:
        if not content.startswith(PDF_MAGIC):
            raise ValidationError(f"'{file_name}' is not a PDF document")

        try:
            file_ref = await asyncio.wait_for(
                self.document_store.store_document(content, file_name),
                self.timeout_s,
            )
        except TimeoutError as e:
            raise UploadError(f"Document upload timed out after {self.timeout_s:g}s") from e

        pm = PMRecord(
            id=uuid4(),
            file_name=file_name,
            file_ref=file_ref,
            owner=owner.strip(),
            pm_type=pm_type.strip(),
            uploaded_by=uploaded_by,
        )
        await self.pm_repo.save(pm)
        logger.info(f"Registered PM {pm.id} from {file_name} (owner={pm.owner or '-'})")
        return pm
