from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from pmtracker.domain.entities.execution import Execution


class ExecutionRepoPort(ABC):
    """Port for durable storage of finished executions."""

    @abstractmethod
    async def save(self, execution: "Execution") -> UUID:
        """Store a new execution and return its stable identifier.

        Raises StorageError if the record cannot be written.
        """

    @abstractmethod
    async def get(self, execution_id: UUID) -> "Execution":
        """Load an execution. Raises NotFoundError if absent."""

    @abstractmethod
    async def attach_report(self, execution_id: UUID, report_ref: str) -> "Execution":
        """Set the report location on a stored execution."""

    @abstractmethod
    async def list_for_template(self, template_id: UUID) -> list["Execution"]:
        """Executions of a template, most recent first."""
