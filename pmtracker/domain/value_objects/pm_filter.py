from pydantic import BaseModel

from pmtracker.domain.value_objects.pm_status import PMStatus


class PMFilter(BaseModel, frozen=True):
    """Which PMs a viewer sees.

    None on any field means "no restriction". Owner and type match
    case-insensitively and exactly.
    """

    owner: str | None = None
    statuses: frozenset[PMStatus] | None = None
    pm_type: str | None = None
    include_inactive: bool = False

    def matches(
        self,
        owner: str,
        status: PMStatus,
        pm_type: str,
        active: bool,
    ) -> bool:
        if not active and not self.include_inactive:
            return False
        if self.owner and owner.strip().lower() != self.owner.strip().lower():
            return False
        if self.statuses is not None and status not in self.statuses:
            return False
        if self.pm_type and pm_type.strip().lower() != self.pm_type.strip().lower():
            return False
        return True
