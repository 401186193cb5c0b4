from abc import ABC, abstractmethod


class PhotoStorePort(ABC):
    """Port for uploading evidence photos."""

    @abstractmethod
    async def upload(self, data: bytes, content_type: str, file_name: str) -> str:
        """Upload one photo and return a stable reference.

        Raises UploadError on failure or timeout.
        """


class ReportStorePort(ABC):
    """Port for storing compiled reports."""

    @abstractmethod
    async def store(self, content: bytes, filename: str) -> str:
        """Store report bytes and return a publicly resolvable reference.

        Raises StorageError on failure or timeout.
        """


class DocumentStorePort(ABC):
    """Port for storing uploaded PM source documents."""

    @abstractmethod
    async def store_document(self, content: bytes, filename: str) -> str:
        """Store a source document and return its reference.

        Raises UploadError on failure or timeout.
        """
