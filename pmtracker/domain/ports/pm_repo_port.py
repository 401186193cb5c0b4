from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from pmtracker.domain.entities.pm_record import PMRecord


class PMRepoPort(ABC):
    """Port for PM record persistence."""

    @abstractmethod
    async def get(self, pm_id: UUID) -> "PMRecord":
        """Load a PM record. Raises NotFoundError if absent."""

    @abstractmethod
    async def save(self, pm: "PMRecord") -> None:
        """Create or overwrite a PM record."""

    @abstractmethod
    async def list(self) -> list["PMRecord"]:
        """Return every PM record, active or not."""
