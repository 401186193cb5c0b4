from pydantic import BaseModel, Field


class PhotoFailure(BaseModel, frozen=True):
    ref: str
    reason: str


class CompiledReport(BaseModel, frozen=True):
    content: bytes
    filename: str
    page_count: int
    photo_failures: list[PhotoFailure] = Field(default_factory=list)
