"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the use cases and screens decoupled from the storage engine
2. Use in-memory storage for testing
3. Swap in a real database later without touching business logic

The interface is intentionally small: point reads, a live ordered view,
upsert and delete. Cascading deletes are the store's job, not the caller's.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Callable, Generic, Optional, TypeVar

from spliteasy.models.audit import AuditEvent

EntityT = TypeVar("EntityT")

ScopeFilter = Callable[[EntityT], bool]
Comparator = Callable[[EntityT, EntityT], int]


class EntityStorageInterface(ABC, Generic[EntityT]):
    """
    Abstract interface for one entity type (groups, bills or members).

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> Optional[EntityT]:
        """
        Retrieve a record by its ID.

        Returns:
            The record if found, None otherwise

        Raises:
            StoreUnavailableError: If the store cannot be reached
        """
        pass

    @abstractmethod
    def observe_ordered(
        self,
        where: Optional[ScopeFilter] = None,
        comparator: Optional[Comparator] = None,
    ) -> AsyncIterator[list[EntityT]]:
        """
        Live, ordered view of every record matching `where`.

        The first item is the current snapshot. After that a new full
        snapshot is produced whenever a matching record is inserted,
        updated or deleted. The sequence never ends on its own; the
        consumer stops it by cancelling or closing the iterator.

        Args:
            where: Scope filter; None means every record
            comparator: Sort instruction from spliteasy.ordering

        Raises:
            StoreUnavailableError: While iterating, if the store goes away
        """
        pass

    @abstractmethod
    async def upsert(self, entity: EntityT) -> int:
        """
        Insert the record if its id is None, otherwise update it.

        Returns:
            The record's id (newly assigned on insert)

        Raises:
            NotFoundError: If updating an id that does not exist, or the
                           record points at a group that does not exist
            StoreUnavailableError: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def delete(self, entity_id: int) -> None:
        """
        Delete a record by ID (and everything it owns).

        Raises:
            NotFoundError: If no record has this id
            StoreUnavailableError: If the store cannot be reached
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: int,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity, in chronological order.
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class StoreUnavailableError(StorageError):
    """The storage backend cannot be reached or has been closed."""
    pass
