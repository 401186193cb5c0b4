"""Error kinds raised by the domain and application layers.

Callers distinguish recoverable I/O failures (UploadError, StorageError)
from invariant violations (ValidationError, InvalidTransitionError).
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from pmtracker.domain.value_objects.pm_status import PMStatus


class PMTrackerError(Exception):
    """Base class for all pm-tracker errors."""


class ValidationError(PMTrackerError):
    """A task, finalize or input invariant does not hold."""

    def __init__(self, message: str, reasons: list[str] | None = None) -> None:
        super().__init__(message)
        self.reasons = reasons or []


class NotFoundError(PMTrackerError):
    """Referenced PM, template, execution or photo does not exist."""

    def __init__(self, kind: str, identifier: object) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class UploadError(PMTrackerError):
    """Photo or document upload failed. Safe to retry."""


class StorageError(PMTrackerError):
    """Persisting an artifact to storage failed. Safe to retry."""


class ReportStorageFailed(StorageError):
    """The execution was persisted but its compiled report could not be stored.

    Carries everything the caller needs to retry storage without
    recompiling, or to leave the execution marked as report pending.
    """

    def __init__(
        self,
        execution_id: UUID,
        filename: str,
        content: bytes,
        cause: BaseException,
        page_count: int = 0,
    ) -> None:
        super().__init__(
            f"Execution {execution_id} saved but report '{filename}' could not be stored: {cause}"
        )
        self.execution_id = execution_id
        self.filename = filename
        self.content = content
        self.page_count = page_count
        self.cause = cause


class PhotoFetchError(PMTrackerError):
    """A photo could not be fetched or decoded for embedding."""


class InvalidTransitionError(PMTrackerError):
    """Requested PM status change is not allowed from the current status."""

    def __init__(self, current: PMStatus, requested: PMStatus) -> None:
        super().__init__(
            f"Cannot move PM from '{current.value}' to '{requested.value}'"
        )
        self.current = current
        self.requested = requested
