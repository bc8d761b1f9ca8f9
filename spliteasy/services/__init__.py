"""Services package."""

from spliteasy.services.storage import (
    AuditStorageInterface,
    EntityStorageInterface,
    InMemoryAuditStorage,
    InMemoryBillStorage,
    InMemoryDatabase,
    InMemoryGroupStorage,
    InMemoryMemberStorage,
    NotFoundError,
    StorageError,
    StoreUnavailableError,
)

__all__ = [
    "AuditStorageInterface",
    "EntityStorageInterface",
    "InMemoryAuditStorage",
    "InMemoryBillStorage",
    "InMemoryDatabase",
    "InMemoryGroupStorage",
    "InMemoryMemberStorage",
    "NotFoundError",
    "StorageError",
    "StoreUnavailableError",
]
