"""
Storage Services Package

Provides abstract interfaces and the in-memory reference implementation.
Any engine with CRUD, live ordered views and cascading group deletes
can stand in for it.
"""

from spliteasy.services.storage.interface import (
    AuditStorageInterface,
    EntityStorageInterface,
    NotFoundError,
    StorageError,
    StoreUnavailableError,
)
from spliteasy.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryBillStorage,
    InMemoryDatabase,
    InMemoryGroupStorage,
    InMemoryMemberStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "EntityStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    "StoreUnavailableError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryBillStorage",
    "InMemoryDatabase",
    "InMemoryGroupStorage",
    "InMemoryMemberStorage",
]
