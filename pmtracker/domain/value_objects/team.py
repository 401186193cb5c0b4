from pydantic import BaseModel, field_validator


class Team(BaseModel, frozen=True):
    """Technicians who ran the checklist and the GL who reviews it.

    Names are opaque strings; they are never checked against a roster.
    """

    technician_1: str
    technician_2: str | None = None
    reviewer: str

    @field_validator("technician_1", "reviewer")
    @classmethod
    def _required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("technician_2")
    @classmethod
    def _optional(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @property
    def technicians(self) -> list[str]:
        return [n for n in (self.technician_1, self.technician_2) if n]

    def team_line(self) -> str:
        """Report header line, e.g. "Team: Ana & Luis | GL: Marta"."""
        names = " & ".join(self.technicians)
        return f"Team: {names} | GL: {self.reviewer}"
