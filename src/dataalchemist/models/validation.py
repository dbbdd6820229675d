"""Validation result models."""

from enum import Enum

from pydantic import BaseModel, Field

from dataalchemist.models.entities import EntityType

# Row index used for issues that concern a whole collection
DATASET_ROW = -1


class Severity(str, Enum):
    """Errors block allocation readiness; warnings are informational."""

    ERROR = "error"
    WARNING = "warning"


class ValidationIssue(BaseModel):
    """A single problem found in the uploaded data."""

    id: str = Field(default="", description="Sequential id assigned by validate()")
    entity_type: EntityType = Field(..., description="Collection the issue belongs to")
    row_index: int = Field(
        ..., ge=DATASET_ROW, description="0-based row, or -1 for dataset-level issues"
    )
    field: str = Field(..., description="External column name the issue concerns")
    message: str = Field(..., description="What is wrong")
    severity: Severity = Field(..., description="error or warning")
    suggestion: str | None = Field(default=None, description="How to fix it")

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    @property
    def is_dataset_level(self) -> bool:
        return self.row_index == DATASET_ROW


class ValidationSummary(BaseModel):
    """Counts over a list of issues."""

    error_count: int = 0
    warning_count: int = 0
    by_entity: dict[EntityType, int] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.error_count + self.warning_count

    @property
    def is_allocation_ready(self) -> bool:
        """Warnings never block; a single error does."""
        return self.error_count == 0
