"""Audit logging package."""

from spliteasy.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
