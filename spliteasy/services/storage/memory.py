"""
In-Memory Storage Implementation

DESIGN DECISION: The reference store keeps everything in dicts because:
1. Tests need a store with real live-query and cascade behavior
2. No database setup required
3. Every write is a single synchronous step on the event loop,
   so reads are always snapshot-consistent

TRADEOFFS:
- Nothing survives the process
- Listener queues are unbounded (fine for one user's groups)

Live views work by change notification: each write pushes the touched
records (old and new versions) onto every listener queue of the table,
and each view re-reads its snapshot when a touched record is in scope.
"""

import asyncio
from functools import cmp_to_key
from typing import AsyncIterator, Generic, Optional

import structlog

from spliteasy.models.audit import AuditEvent
from spliteasy.models.bill import Bill
from spliteasy.models.group import Group
from spliteasy.models.member import Member
from spliteasy.services.storage.interface import (
    AuditStorageInterface,
    Comparator,
    EntityStorageInterface,
    EntityT,
    NotFoundError,
    ScopeFilter,
    StoreUnavailableError,
)

logger = structlog.get_logger(__name__)


class _Table(Generic[EntityT]):
    """Rows of one entity type plus the queues of its live views."""

    def __init__(self, name: str):
        self.name = name
        self.rows: dict[int, EntityT] = {}
        self._next_id = 1
        self._listeners: set[asyncio.Queue] = set()

    def allocate_id(self) -> int:
        # Ids are never reused, even after deletes.
        entity_id = self._next_id
        self._next_id += 1
        return entity_id

    def listen(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        self._listeners.add(queue)
        return queue

    def unlisten(self, queue: asyncio.Queue) -> None:
        self._listeners.discard(queue)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def notify(self, changed: list) -> None:
        for queue in self._listeners:
            queue.put_nowait(list(changed))


class InMemoryDatabase:
    """
    Three tables (groups, bills, members) with cascade on group delete.

    Usage:
        database = InMemoryDatabase()
        group_id = await database.groups.upsert(Group(name="Trip"))
    """

    def __init__(self):
        self._closed = False
        self.group_table: _Table[Group] = _Table("groups")
        self.bill_table: _Table[Bill] = _Table("bills")
        self.member_table: _Table[Member] = _Table("members")

        self.groups = InMemoryGroupStorage(self, self.group_table)
        self.bills = InMemoryBillStorage(self, self.bill_table)
        self.members = InMemoryMemberStorage(self, self.member_table)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def ensure_open(self) -> None:
        if self._closed:
            raise StoreUnavailableError("Database is closed")

    def close(self) -> None:
        """
        Close the database.

        Every later call fails with StoreUnavailableError, and every open
        live view raises it on its next step.
        """
        self._closed = True
        for table in (self.group_table, self.bill_table, self.member_table):
            table.notify([])
        logger.info("database_closed")


class _InMemoryEntityStorage(EntityStorageInterface[EntityT]):
    """Shared CRUD and live-view logic for one table."""

    entity_type = "entity"

    def __init__(self, database: InMemoryDatabase, table: _Table[EntityT]):
        self._db = database
        self._table = table

    async def get_by_id(self, entity_id: int) -> Optional[EntityT]:
        self._db.ensure_open()
        return self._table.rows.get(entity_id)

    async def observe_ordered(
        self,
        where: Optional[ScopeFilter] = None,
        comparator: Optional[Comparator] = None,
    ) -> AsyncIterator[list[EntityT]]:
        self._db.ensure_open()
        queue = self._table.listen()
        try:
            yield self._snapshot(where, comparator)
            while True:
                changed = await queue.get()
                while not queue.empty():
                    changed.extend(queue.get_nowait())
                self._db.ensure_open()
                if where is None or any(where(row) for row in changed):
                    yield self._snapshot(where, comparator)
        finally:
            self._table.unlisten(queue)

    def _snapshot(
        self,
        where: Optional[ScopeFilter],
        comparator: Optional[Comparator],
    ) -> list[EntityT]:
        rows = [
            row for row in self._table.rows.values()
            if where is None or where(row)
        ]
        if comparator is not None:
            rows.sort(key=cmp_to_key(comparator))
        return rows

    def _check_references(self, entity: EntityT) -> None:
        """Raise NotFoundError if the record points at a missing parent."""
        pass

    async def upsert(self, entity: EntityT) -> int:
        self._db.ensure_open()
        self._check_references(entity)

        if entity.id is None:
            entity_id = self._table.allocate_id()
            stored = entity.model_copy(update={"id": entity_id})
            self._table.rows[entity_id] = stored
            self._table.notify([stored])
            logger.debug("row_inserted", table=self._table.name, id=entity_id)
            return entity_id

        previous = self._table.rows.get(entity.id)
        if previous is None:
            raise NotFoundError(f"No {self.entity_type} with id {entity.id}")
        self._table.rows[entity.id] = entity
        self._table.notify([previous, entity])
        logger.debug("row_updated", table=self._table.name, id=entity.id)
        return entity.id

    async def delete(self, entity_id: int) -> None:
        self._db.ensure_open()
        removed = self._table.rows.pop(entity_id, None)
        if removed is None:
            raise NotFoundError(f"No {self.entity_type} with id {entity_id}")
        self._table.notify([removed])
        logger.debug("row_deleted", table=self._table.name, id=entity_id)


class InMemoryGroupStorage(_InMemoryEntityStorage[Group]):
    entity_type = "group"

    async def delete(self, entity_id: int) -> None:
        """Delete a group together with all of its bills and members."""
        self._db.ensure_open()
        group = self._table.rows.get(entity_id)
        if group is None:
            raise NotFoundError(f"No group with id {entity_id}")

        for table in (self._db.bill_table, self._db.member_table):
            owned = [row for row in table.rows.values() if row.group_id == entity_id]
            for row in owned:
                del table.rows[row.id]
            if owned:
                table.notify(owned)
                logger.debug(
                    "rows_cascaded",
                    table=table.name,
                    group_id=entity_id,
                    count=len(owned),
                )

        del self._table.rows[entity_id]
        self._table.notify([group])
        logger.debug("row_deleted", table=self._table.name, id=entity_id)


class _GroupScopedStorage(_InMemoryEntityStorage[EntityT]):
    def _check_references(self, entity: EntityT) -> None:
        if entity.group_id not in self._db.group_table.rows:
            raise NotFoundError(f"No group with id {entity.group_id}")


class InMemoryBillStorage(_GroupScopedStorage[Bill]):
    entity_type = "bill"


class InMemoryMemberStorage(_GroupScopedStorage[Member]):
    entity_type = "member"


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only audit log kept in a list."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: int,
    ) -> list[AuditEvent]:
        return [
            event for event in self._events
            if event.entity_type == entity_type and event.entity_id == entity_id
        ]

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
