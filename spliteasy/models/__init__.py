"""
Data Models Package

This package contains all Pydantic models used in SplitEasy.
All data flowing through the system must conform to these schemas.
"""

from spliteasy.models.bill import Bill
from spliteasy.models.group import Group
from spliteasy.models.member import Member
from spliteasy.models.order import (
    BillOrder,
    BillOrderField,
    GroupOrder,
    GroupOrderField,
    MemberOrder,
    MemberOrderField,
    OrderType,
)
from spliteasy.models.events import (
    ChangeBillOrder,
    ChangeGroupOrder,
    ChangeMemberOrder,
    DeleteBill,
    DeleteGroup,
    DeleteMember,
    EnteredAmount,
    EnteredDate,
    EnteredDescription,
    EnteredName,
    EntitySaved,
    SaveForm,
    ShowNotification,
)
from spliteasy.models.validation import (
    InvalidInputError,
    ValidationIssue,
    ValidationResult,
)
from spliteasy.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Entities
    "Bill",
    "Group",
    "Member",
    # Order selections
    "BillOrder",
    "BillOrderField",
    "GroupOrder",
    "GroupOrderField",
    "MemberOrder",
    "MemberOrderField",
    "OrderType",
    # Intents and UI events
    "ChangeBillOrder",
    "ChangeGroupOrder",
    "ChangeMemberOrder",
    "DeleteBill",
    "DeleteGroup",
    "DeleteMember",
    "EnteredAmount",
    "EnteredDate",
    "EnteredDescription",
    "EnteredName",
    "EntitySaved",
    "SaveForm",
    "ShowNotification",
    # Validation
    "InvalidInputError",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
