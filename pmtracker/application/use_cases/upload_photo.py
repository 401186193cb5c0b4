import asyncio

from loguru import logger

from pmtracker.domain.errors import UploadError, ValidationError
from pmtracker.domain.ports.blob_store_port import PhotoStorePort
from pmtracker.domain.services.execution_wizard import ExecutionWizard
from pmtracker.domain.services.text_sanitizer import sanitize_for_filename
from pmtracker.domain.value_objects import detect_image_format, format_for_content_type

DEFAULT_UPLOAD_TIMEOUT_S = 30.0


class UploadPhoto:
    """Upload one evidence photo and attach its reference to a task.

    The wizard is only updated after the upload succeeded, so a failed
    upload leaves the session state untouched.
    """

    def __init__(
        self,
        photo_store: PhotoStorePort,
        timeout_s: float = DEFAULT_UPLOAD_TIMEOUT_S,
    ) -> None:
        self.photo_store = photo_store
        self.timeout_s = timeout_s

    async def execute(
        self,
        wizard: ExecutionWizard,
        index: int,
        data: bytes,
        content_type: str,
        file_name: str = "",
    ) -> str:
        wizard.result(index)

        declared = format_for_content_type(content_type)
        sniffed = detect_image_format(data)
        if declared is None or sniffed is None:
            raise ValidationError(
                f"Unsupported photo '{file_name or content_type}': only JPEG and PNG are accepted"
            )
        if declared != sniffed:
            raise ValidationError(
                f"Photo '{file_name}' is declared as {content_type} but contains {sniffed.value}"
            )

        safe_name = sanitize_for_filename(file_name) or f"pm_photo.{sniffed.value}"
        try:
            ref = await asyncio.wait_for(
                self.photo_store.upload(data, sniffed.content_type, safe_name),
                self.timeout_s,
            )
        except TimeoutError as e:
            raise UploadError(f"Photo upload timed out after {self.timeout_s:g}s") from e

        wizard.add_photo(index, ref)
        logger.info(f"Attached photo {ref} to task index {index}")
        return ref
