"""
Validation Models

InvalidInputError is the per-field error kind returned by the check
functions. ValidationResult gathers every field error of one record;
a record with any issue must never reach the store.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class InvalidInputError(str, Enum):
    """
    Why a single field value was rejected.

    Recoverable: shown inline next to the field.
    """
    REQUIRED = "required"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    OUT_OF_RANGE = "out_of_range"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    InvalidInputError.REQUIRED: "This field is required",
    InvalidInputError.TOO_SHORT: "Too short",
    InvalidInputError.TOO_LONG: "Too long",
    InvalidInputError.OUT_OF_RANGE: "Value out of range",
}


class ValidationIssue(BaseModel):
    """A single field that failed its check."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    error: InvalidInputError
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidationResult(BaseModel):
    """
    Result of running every field check of one record.

    DESIGN DECISION: There are no warnings here. A field either
    passes or blocks the write.
    """

    entity_type: str = Field(
        ...,
        description="Type of record checked (e.g. 'bill')"
    )
    entity_id: Optional[int] = None
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def errors_by_field(self) -> dict[str, InvalidInputError]:
        return {issue.field: issue.error for issue in self.issues}

    def summary(self) -> str:
        """One line naming every failing field, for logs and notifications."""
        if self.is_valid:
            return f"{self.entity_type} is valid"
        fields = ", ".join(f"{issue.field} ({issue.error.value})" for issue in self.issues)
        return f"Invalid {self.entity_type}: {fields}"
