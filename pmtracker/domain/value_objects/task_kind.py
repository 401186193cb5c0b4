from enum import Enum


class TaskKind(str, Enum):
    MEASUREMENT = "measurement"
    STANDARD = "standard"
