from pmtracker.infrastructure.persistence.json_repo import (
    JsonExecutionRepo,
    JsonPMRepo,
    JsonTemplateRepo,
)

__all__ = ["JsonExecutionRepo", "JsonPMRepo", "JsonTemplateRepo"]
