from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pmtracker.domain.services.report_layout import ReportLayout


class ReportRendererPort(ABC):
    """Port that turns a planned page layout into document bytes."""

    @abstractmethod
    def check_image(self, data: bytes) -> None:
        """Raise PhotoFetchError if the renderer cannot embed this image."""

    @abstractmethod
    def render(self, layout: "ReportLayout") -> bytes:
        """Draw every placed block and return the finished document.

        A photo that fails to embed is replaced by an inline error note.
        """
