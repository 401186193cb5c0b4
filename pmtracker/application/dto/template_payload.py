from pydantic import BaseModel, Field


class ParsedTask(BaseModel):
    """One checklist row as produced by document extraction.

    Rows whose sequence number is not a whole number are discarded on import.
    """

    sequence_number: int | float | str | None = None
    title: str | None = ""
    key_points: str | None = ""
    rationale: str | None = ""
    has_reference_image: bool | None = False


class TemplatePayload(BaseModel):
    pm_number: str | None = None
    name: str | None = None
    asset_code: str | None = None
    location: str | None = None
    tasks: list[ParsedTask] = Field(default_factory=list)
