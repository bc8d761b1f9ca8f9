"""
Field-Level Validation Engine

DESIGN DECISION: Validation is split in two layers:

LAYER 1 - FIELD CHECKS:
- check_text, check_decimal, check_date
- Pure and total: same input, same output, no I/O
- Used by the edit forms on load and on every keystroke

LAYER 2 - RECORD CHECKS:
- validate_group, validate_bill, validate_member
- Run every field check of a record with the configured limits
- Used by the mutation use cases as the last gate before a write

IMPORTANT: Validation NEVER fixes a value. It only reports.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from spliteasy.config import BillSettings, GroupSettings, MemberSettings, get_settings
from spliteasy.models.bill import Bill
from spliteasy.models.group import Group
from spliteasy.models.member import Member
from spliteasy.models.validation import (
    InvalidInputError,
    ValidationIssue,
    ValidationResult,
)


class ValidationFailedError(Exception):
    """
    A record failed one or more field checks and was not written.

    Carries the full ValidationResult so callers can show every issue.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.summary())


# =============================================================================
# FIELD CHECKS
# =============================================================================

def check_text(
    value: Optional[str],
    is_required: bool,
    min_length: int,
    max_length: int,
) -> Optional[InvalidInputError]:
    """
    Check a text value against its length limits.

    Blank text counts as empty. Lengths are measured on the trimmed
    text, since that is what gets saved. Empty text that is not
    required skips the length checks entirely.
    """
    text = (value or "").strip()
    if not text:
        return InvalidInputError.REQUIRED if is_required else None
    if len(text) < min_length:
        return InvalidInputError.TOO_SHORT
    if len(text) > max_length:
        return InvalidInputError.TOO_LONG
    return None


def check_decimal(
    value: Optional[Union[Decimal, float, int]],
    is_required: bool,
    max_value: Union[Decimal, float, int],
) -> Optional[InvalidInputError]:
    """Check an amount: absent only if optional, otherwise 0 < value <= max_value."""
    if value is None:
        return InvalidInputError.REQUIRED if is_required else None
    amount = Decimal(str(value))
    if not amount.is_finite():
        return InvalidInputError.OUT_OF_RANGE
    if amount <= 0 or amount > Decimal(str(max_value)):
        return InvalidInputError.OUT_OF_RANGE
    return None


def check_date(
    value: Optional[datetime],
    is_required: bool,
) -> Optional[InvalidInputError]:
    if value is None and is_required:
        return InvalidInputError.REQUIRED
    return None


def parse_decimal(text: Optional[str]) -> Optional[Decimal]:
    """
    Parse user-typed amount text.

    Returns None for blank, unparseable ("abc") or non-finite ("NaN")
    text, so check_decimal treats it as an absent value.
    """
    if text is None or not text.strip():
        return None
    try:
        amount = Decimal(text.strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


# =============================================================================
# RECORD CHECKS
# =============================================================================

def _collect(
    entity_type: str,
    entity_id: Optional[int],
    errors: dict[str, Optional[InvalidInputError]],
) -> ValidationResult:
    issues = [
        ValidationIssue(
            field=field,
            error=error,
            message=f"{field.capitalize()}: {error.message}",
        )
        for field, error in errors.items()
        if error is not None
    ]
    return ValidationResult(
        entity_type=entity_type,
        entity_id=entity_id,
        issues=issues,
    )


def validate_group(
    group: Group,
    rules: Optional[GroupSettings] = None,
) -> ValidationResult:
    rules = rules or get_settings().group
    return _collect("group", group.id, {
        "name": check_text(
            group.name,
            is_required=rules.is_name_required,
            min_length=rules.min_name_len,
            max_length=rules.max_name_len,
        ),
    })


def validate_bill(
    bill: Bill,
    rules: Optional[BillSettings] = None,
) -> ValidationResult:
    """
    Run every field check of a bill.

    Args:
        bill: The candidate bill (persisted or not)
        rules: Field limits; defaults to the configured BillSettings

    Returns:
        ValidationResult listing every failing field
    """
    rules = rules or get_settings().bill
    return _collect("bill", bill.id, {
        "name": check_text(
            bill.name,
            is_required=rules.is_name_required,
            min_length=rules.min_name_len,
            max_length=rules.max_name_len,
        ),
        "description": check_text(
            bill.description,
            is_required=rules.is_desc_required,
            min_length=rules.min_desc_len,
            max_length=rules.max_desc_len,
        ),
        "amount": check_decimal(
            bill.amount,
            is_required=rules.is_amount_required,
            max_value=rules.max_amount,
        ),
        "date": check_date(
            bill.date,
            is_required=rules.is_date_required,
        ),
    })


def validate_member(
    member: Member,
    rules: Optional[MemberSettings] = None,
) -> ValidationResult:
    rules = rules or get_settings().member
    return _collect("member", member.id, {
        "name": check_text(
            member.name,
            is_required=rules.is_name_required,
            min_length=rules.min_name_len,
            max_length=rules.max_name_len,
        ),
    })
