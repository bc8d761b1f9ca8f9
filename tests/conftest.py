"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Optional

import pytest

from spliteasy.orchestrator import create_app_components
from spliteasy.services.storage import (
    EntityStorageInterface,
    InMemoryAuditStorage,
    InMemoryDatabase,
)


class ScriptedStorage(EntityStorageInterface):
    """
    Storage whose live views emit only what the test feeds them.

    Every observe_ordered() call opens a new stream record:
        {"feed": asyncio.Queue, "closed": bool}
    Putting a list on the feed emits it; putting an exception raises it.
    """

    def __init__(self):
        self.streams: list[dict] = []

    async def get_by_id(self, entity_id: int) -> Optional[object]:
        return None

    def observe_ordered(self, where=None, comparator=None):
        record = {"feed": asyncio.Queue(), "closed": False}
        self.streams.append(record)
        return self._iterate(record)

    async def _iterate(self, record):
        try:
            while True:
                item = await record["feed"].get()
                if isinstance(item, Exception):
                    raise item
                yield item
        finally:
            record["closed"] = True

    async def upsert(self, entity) -> int:
        raise NotImplementedError

    async def delete(self, entity_id: int) -> None:
        raise NotImplementedError


@pytest.fixture
def database():
    return InMemoryDatabase()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def components(database, audit_storage):
    return create_app_components(database, audit_storage)


@pytest.fixture
def scripted_storage():
    return ScriptedStorage()


@pytest.fixture
def wait_until():
    """Poll the event loop until predicate() is true (fails after timeout)."""
    async def _wait_until(predicate, timeout: float = 1.0):
        async def poll():
            while not predicate():
                await asyncio.sleep(0)
        await asyncio.wait_for(poll(), timeout)
    return _wait_until


@pytest.fixture
def settle():
    """Let every ready task run a few steps."""
    async def _settle(rounds: int = 20):
        for _ in range(rounds):
            await asyncio.sleep(0)
    return _settle
