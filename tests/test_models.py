"""
Tests for SplitEasy

Test strategy:
1. Unit tests for individual components (models, validators, ordering)
2. Integration tests for flows against the in-memory store
3. Scripted storage where a test must control exactly when snapshots arrive
"""

import pytest
from datetime import datetime
from decimal import Decimal

from pydantic import ValidationError

from spliteasy.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    Bill,
    BillOrder,
    BillOrderField,
    ChangeBillOrder,
    EnteredAmount,
    Group,
    GroupOrder,
    GroupOrderField,
    InvalidInputError,
    Member,
    MemberOrder,
    MemberOrderField,
    OrderType,
    ValidationIssue,
    ValidationResult,
)


class TestEntityModels:
    """Tests for the group, bill and member models."""

    def test_group_creation(self):
        """Test a new group has no id yet."""
        group = Group(name="Trip")
        assert group.id is None
        assert group.name == "Trip"

    def test_bill_creation(self):
        """Test Bill model creation with every field."""
        bill = Bill(
            id=3,
            group_id=1,
            name="Dinner",
            description="Pizza place",
            amount=Decimal("42.50"),
            date=datetime(2024, 5, 1, 20, 30),
        )
        assert bill.amount == Decimal("42.50")
        assert bill.is_persisted is True

    def test_bill_optional_fields_default_to_none(self):
        """Test a bill needs only its group and name to be built."""
        bill = Bill(group_id=1, name="Taxi")
        assert bill.description is None
        assert bill.amount is None
        assert bill.date is None
        assert bill.is_persisted is False

    def test_models_accept_values_that_break_limits(self):
        """Test limits are not enforced by the models (the form flags them)."""
        bill = Bill(group_id=1, name="", amount=Decimal("-5"))
        assert bill.name == ""
        assert bill.amount == Decimal("-5")

    def test_models_are_immutable(self):
        """Test records cannot be changed in place."""
        member = Member(group_id=1, name="Ana")
        with pytest.raises(ValidationError):
            member.name = "Bea"

    def test_model_copy_assigns_id(self):
        """Test updates go through model_copy."""
        group = Group(name="Trip")
        stored = group.model_copy(update={"id": 7})
        assert stored.id == 7
        assert group.id is None


class TestOrderModels:
    """Tests for order selections."""

    def test_default_orders(self):
        """Test each list starts with its default order."""
        assert GroupOrder() == GroupOrder(
            by=GroupOrderField.CREATED,
            order_type=OrderType.DESCENDING,
        )
        assert BillOrder() == BillOrder(
            by=BillOrderField.DATE,
            order_type=OrderType.DESCENDING,
        )
        assert MemberOrder() == MemberOrder(
            by=MemberOrderField.NAME,
            order_type=OrderType.ASCENDING,
        )

    def test_order_selection_from_strings(self):
        """Test selections can be built from plain values."""
        order = BillOrder(by="amount", order_type="ascending")
        assert order.by == BillOrderField.AMOUNT
        assert order.order_type == OrderType.ASCENDING

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            BillOrder(by="weight")


class TestEvents:
    """Tests for intents."""

    def test_intents_compare_by_value(self):
        """Test two identical intents are equal."""
        assert EnteredAmount(value="1.5") == EnteredAmount(value="1.5")

    def test_change_order_carries_selection(self):
        order = BillOrder(by=BillOrderField.NAME, order_type=OrderType.ASCENDING)
        event = ChangeBillOrder(order=order)
        assert event.order.by == BillOrderField.NAME


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.ENTITY_CREATED,
            description="Bill created: Dinner",
        )
        assert event.event_type == AuditEventType.ENTITY_CREATED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.ENTITY_UPDATED,
            entity_type="bill",
            entity_id=3,
            description="Bill updated: Dinner",
            details={"name": "Dinner"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "entity_updated"
        assert log_dict["entity_id"] == 3
        assert log_dict["details"]["name"] == "Dinner"

    def test_audit_event_builder_entity_saved(self):
        """Test AuditEventBuilder.entity_saved picks created vs updated."""
        created = AuditEventBuilder.entity_saved("bill", 1, created=True, name="Dinner")
        updated = AuditEventBuilder.entity_saved("bill", 1, created=False, name="Dinner")

        assert created.event_type == AuditEventType.ENTITY_CREATED
        assert updated.event_type == AuditEventType.ENTITY_UPDATED
        assert created.description == "Bill created: Dinner"

    def test_audit_event_builder_validation_failed(self):
        """Test refused writes are warnings carrying the issues."""
        event = AuditEventBuilder.validation_failed(
            entity_type="bill",
            entity_id=None,
            issues=[{"field": "name", "error": "required"}],
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.details["issues"][0]["field"] == "name"

    def test_audit_event_builder_save_failed(self):
        event = AuditEventBuilder.save_failed("member", 4, "No group with id 9")
        assert event.event_type == AuditEventType.SAVE_FAILED
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "No group with id 9"


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test is_valid and errors_by_field."""
        result = ValidationResult(
            entity_type="bill",
            issues=[
                ValidationIssue(
                    field="amount",
                    error=InvalidInputError.REQUIRED,
                    message="Amount: This field is required",
                ),
            ],
        )
        assert result.is_valid is False
        assert result.errors_by_field == {"amount": InvalidInputError.REQUIRED}
        assert result.summary() == "Invalid bill: amount (required)"

    def test_validation_result_without_issues(self):
        result = ValidationResult(entity_type="group", entity_id=2)
        assert result.is_valid is True
        assert result.summary() == "group is valid"

    def test_every_error_has_a_message(self):
        """Test each error kind renders a message."""
        for error in InvalidInputError:
            assert error.message


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
