from enum import Enum


class ResultStatus(str, Enum):
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
