"""
Audit Logger

Records what happened to groups, bills and members: created, updated,
deleted, refused by validation, or failed in the store.

A broken audit backend never blocks a write; the failure is only logged.
"""

import logging
from typing import Optional

import structlog

from spliteasy.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from spliteasy.models.validation import ValidationResult
from spliteasy.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through stdlib logging at the given level."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("spliteasy").setLevel(level)


class AuditLogger:
    """
    Writes each audit event to the structured log and, when configured,
    to an AuditStorageInterface.
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    async def log(self, event: AuditEvent) -> bool:
        """
        Log one event; the log level follows its severity.

        Returns:
            False if the audit storage rejected it, True otherwise
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_entity_saved(
        self,
        entity_type: str,
        entity_id: int,
        created: bool,
        name: str,
    ) -> None:
        """Log an insert or update."""
        await self.log(AuditEventBuilder.entity_saved(
            entity_type=entity_type,
            entity_id=entity_id,
            created=created,
            name=name,
        ))

    async def log_entity_deleted(
        self,
        entity_type: str,
        entity_id: int,
    ) -> None:
        await self.log(AuditEventBuilder.entity_deleted(
            entity_type=entity_type,
            entity_id=entity_id,
        ))

    async def log_validation_failed(self, result: ValidationResult) -> None:
        """Log a write refused by the field checks."""
        await self.log(AuditEventBuilder.validation_failed(
            entity_type=result.entity_type,
            entity_id=result.entity_id,
            issues=[issue.model_dump(mode="json") for issue in result.issues],
        ))

    async def log_save_failed(
        self,
        entity_type: str,
        entity_id: Optional[int],
        error_message: str,
    ) -> None:
        await self.log(AuditEventBuilder.save_failed(
            entity_type=entity_type,
            entity_id=entity_id,
            error_message=error_message,
        ))

    async def log_delete_failed(
        self,
        entity_type: str,
        entity_id: int,
        error_message: str,
    ) -> None:
        await self.log(AuditEventBuilder.delete_failed(
            entity_type=entity_type,
            entity_id=entity_id,
            error_message=error_message,
        ))
