"""
Audit Models for SplitEasy

Every write the mutation use cases attempt is logged for audit purposes.
This provides:
1. Traceability of who-changed-what in a group
2. Debugging information when a save is refused or fails

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence
    ENTITY_CREATED = "entity_created"
    ENTITY_UPDATED = "entity_updated"
    ENTITY_DELETED = "entity_deleted"

    # Refusals and failures
    VALIDATION_FAILED = "validation_failed"
    SAVE_FAILED = "save_failed"
    DELETE_FAILED = "delete_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'group', 'bill', 'member')"
    )
    entity_id: Optional[int] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entity_saved("bill", 3, created=True, name="Dinner")
        event = AuditEventBuilder.entity_deleted("group", 1)
    """

    @staticmethod
    def entity_saved(
        entity_type: str,
        entity_id: int,
        created: bool,
        name: str,
    ) -> AuditEvent:
        verb = "created" if created else "updated"
        return AuditEvent(
            event_type=(
                AuditEventType.ENTITY_CREATED
                if created
                else AuditEventType.ENTITY_UPDATED
            ),
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type.capitalize()} {verb}: {name}",
            details={"name": name},
        )

    @staticmethod
    def entity_deleted(
        entity_type: str,
        entity_id: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTITY_DELETED,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type.capitalize()} {entity_id} deleted",
        )

    @staticmethod
    def validation_failed(
        entity_type: str,
        entity_id: Optional[int],
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type.capitalize()} refused with {len(issues)} invalid fields",
            details={"issues": issues},
        )

    @staticmethod
    def save_failed(
        entity_type: str,
        entity_id: Optional[int],
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"Saving {entity_type} failed",
            error_message=error_message,
        )

    @staticmethod
    def delete_failed(
        entity_type: str,
        entity_id: int,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"Deleting {entity_type} {entity_id} failed",
            error_message=error_message,
        )
