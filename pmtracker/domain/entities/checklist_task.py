from uuid import UUID

from pydantic import BaseModel


class ChecklistTask(BaseModel, frozen=True):
    id: UUID
    sequence_number: int
    order: int
    title: str
    key_points: str = ""
    rationale: str = ""
    has_reference_image: bool = False

    @property
    def combined_text(self) -> str:
        return f"{self.title} {self.key_points} {self.rationale}"
