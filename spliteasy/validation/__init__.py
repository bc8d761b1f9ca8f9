"""Validation package."""

from spliteasy.validation.validator import (
    ValidationFailedError,
    check_date,
    check_decimal,
    check_text,
    parse_decimal,
    validate_bill,
    validate_group,
    validate_member,
)

__all__ = [
    "ValidationFailedError",
    "check_date",
    "check_decimal",
    "check_text",
    "parse_decimal",
    "validate_bill",
    "validate_group",
    "validate_member",
]
