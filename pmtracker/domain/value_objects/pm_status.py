from enum import Enum


class PMStatus(str, Enum):
    OPEN = "open"
    COMPLETED = "completed"
    CLOSED = "closed"


# Transitions a reviewer may request. OPEN -> COMPLETED is not listed:
# it only happens when an execution is persisted.
REVIEW_TRANSITIONS: frozenset[tuple[PMStatus, PMStatus]] = frozenset(
    {
        (PMStatus.COMPLETED, PMStatus.CLOSED),
        (PMStatus.CLOSED, PMStatus.COMPLETED),
    }
)


def is_review_transition(current: PMStatus, requested: PMStatus) -> bool:
    return (current, requested) in REVIEW_TRANSITIONS
