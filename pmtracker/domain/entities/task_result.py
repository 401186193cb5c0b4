from uuid import UUID

from pydantic import BaseModel, Field

from pmtracker.domain.value_objects import ResultStatus


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class TaskResult(BaseModel):
    task_id: UUID
    status: ResultStatus = ResultStatus.PENDING
    comment: str = ""
    flagged: bool = False
    measurement: str | None = None
    photos: list[str] = Field(default_factory=list)

    @property
    def needs_comment(self) -> bool:
        return self.flagged or self.status == ResultStatus.FAILED

    def add_photo(self, ref: str) -> None:
        self.photos.append(ref)

    def remove_photo(self, ref: str) -> bool:
        """Remove every occurrence of ref. Returns False if it was absent."""
        before = len(self.photos)
        self.photos = [p for p in self.photos if p != ref]
        return len(self.photos) != before

    def freeze(self) -> "RecordedResult":
        return RecordedResult(
            task_id=self.task_id,
            status=self.status,
            comment=self.comment.strip(),
            flagged=self.flagged,
            measurement=None if is_blank(self.measurement) else self.measurement.strip(),
            photos=tuple(self.photos),
        )


class RecordedResult(BaseModel, frozen=True):
    """A TaskResult as locked into an Execution."""

    task_id: UUID
    status: ResultStatus
    comment: str = ""
    flagged: bool = False
    measurement: str | None = None
    photos: tuple[str, ...] = ()
