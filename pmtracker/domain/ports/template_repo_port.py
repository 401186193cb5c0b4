from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from pmtracker.domain.entities.checklist_template import ChecklistTemplate


class TemplateRepoPort(ABC):
    """Port for checklist template lookup and storage."""

    @abstractmethod
    async def get(self, template_id: UUID) -> "ChecklistTemplate":
        """Load a template. Raises NotFoundError if absent."""

    @abstractmethod
    async def get_for_pm(self, pm_id: UUID) -> "ChecklistTemplate | None":
        """Return the template imported for a PM, if any."""

    @abstractmethod
    async def save(self, template: "ChecklistTemplate") -> None:
        """Persist a template."""
