"""Tests for the in-memory store and its live views."""

import asyncio
from decimal import Decimal

import pytest

from spliteasy.models import Bill, BillOrder, Group, Member
from spliteasy.ordering import comparator
from spliteasy.services.storage import NotFoundError, StoreUnavailableError


def _bills_of(database, group_id):
    return database.bills.observe_ordered(
        where=lambda bill: bill.group_id == group_id,
        comparator=comparator(BillOrder()),
    )


async def _next(stream, timeout: float = 1.0):
    return await asyncio.wait_for(stream.__anext__(), timeout)


class TestCrud:
    """Tests for point reads and writes."""

    @pytest.mark.asyncio
    async def test_insert_assigns_increasing_ids(self, database):
        first = await database.groups.upsert(Group(name="Trip"))
        second = await database.groups.upsert(Group(name="Flat"))
        assert second > first
        assert (await database.groups.get_by_id(first)).name == "Trip"

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, database):
        first = await database.groups.upsert(Group(name="Trip"))
        await database.groups.delete(first)
        second = await database.groups.upsert(Group(name="Flat"))
        assert second != first

    @pytest.mark.asyncio
    async def test_update_replaces_record(self, database):
        group_id = await database.groups.upsert(Group(name="Trip"))
        returned = await database.groups.upsert(Group(id=group_id, name="Holiday"))
        assert returned == group_id
        assert (await database.groups.get_by_id(group_id)).name == "Holiday"

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, database):
        assert await database.bills.get_by_id(99) is None

    @pytest.mark.asyncio
    async def test_update_missing_record(self, database):
        with pytest.raises(NotFoundError):
            await database.groups.upsert(Group(id=42, name="Ghost"))

    @pytest.mark.asyncio
    async def test_delete_missing_record(self, database):
        with pytest.raises(NotFoundError):
            await database.members.delete(42)

    @pytest.mark.asyncio
    async def test_bill_needs_existing_group(self, database):
        """Test a bill pointing at a missing group is refused."""
        with pytest.raises(NotFoundError):
            await database.bills.upsert(Bill(group_id=5, name="Dinner"))
        assert database.bill_table.rows == {}


class TestCascade:
    """Tests for deleting a group."""

    @pytest.mark.asyncio
    async def test_group_delete_removes_only_its_children(self, database):
        g1 = await database.groups.upsert(Group(name="Trip"))
        g2 = await database.groups.upsert(Group(name="Flat"))
        await database.bills.upsert(Bill(group_id=g1, name="Dinner"))
        kept_bill = await database.bills.upsert(Bill(group_id=g2, name="Rent"))
        await database.members.upsert(Member(group_id=g1, name="Ana"))
        kept_member = await database.members.upsert(Member(group_id=g2, name="Bea"))

        await database.groups.delete(g1)

        assert await database.groups.get_by_id(g1) is None
        assert list(database.bill_table.rows) == [kept_bill]
        assert list(database.member_table.rows) == [kept_member]


class TestLiveViews:
    """Tests for observe_ordered."""

    @pytest.mark.asyncio
    async def test_first_snapshot_is_current_state(self, database):
        group_id = await database.groups.upsert(Group(name="Trip"))
        await database.bills.upsert(Bill(group_id=group_id, name="Dinner", amount=Decimal("1")))

        stream = _bills_of(database, group_id)
        snapshot = await _next(stream)
        await stream.aclose()

        assert [bill.name for bill in snapshot] == ["Dinner"]

    @pytest.mark.asyncio
    async def test_reemits_after_write_in_scope(self, database):
        group_id = await database.groups.upsert(Group(name="Trip"))
        stream = _bills_of(database, group_id)
        assert await _next(stream) == []

        bill_id = await database.bills.upsert(Bill(group_id=group_id, name="Dinner"))
        snapshot = await _next(stream)
        await stream.aclose()

        assert [bill.id for bill in snapshot] == [bill_id]

    @pytest.mark.asyncio
    async def test_write_out_of_scope_is_not_emitted(self, database):
        """Test the next snapshot after an unrelated write is the next relevant one."""
        g1 = await database.groups.upsert(Group(name="Trip"))
        g2 = await database.groups.upsert(Group(name="Flat"))
        stream = _bills_of(database, g1)
        await _next(stream)

        await database.bills.upsert(Bill(group_id=g2, name="Rent"))
        await database.bills.upsert(Bill(group_id=g1, name="Dinner"))
        snapshot = await _next(stream)
        await stream.aclose()

        assert [bill.name for bill in snapshot] == ["Dinner"]

    @pytest.mark.asyncio
    async def test_cascade_empties_live_bills(self, database):
        group_id = await database.groups.upsert(Group(name="Trip"))
        await database.bills.upsert(Bill(group_id=group_id, name="Dinner"))
        stream = _bills_of(database, group_id)
        assert len(await _next(stream)) == 1

        await database.groups.delete(group_id)
        snapshot = await _next(stream)
        await stream.aclose()

        assert snapshot == []

    @pytest.mark.asyncio
    async def test_snapshot_is_sorted(self, database):
        group_id = await database.groups.upsert(Group(name="Trip"))
        await database.bills.upsert(Bill(group_id=group_id, name="Small", amount=Decimal("1")))
        await database.bills.upsert(Bill(group_id=group_id, name="Big", amount=Decimal("9")))

        stream = database.bills.observe_ordered(
            where=lambda bill: bill.group_id == group_id,
            comparator=comparator(BillOrder(by="amount", order_type="descending")),
        )
        snapshot = await _next(stream)
        await stream.aclose()

        assert [bill.name for bill in snapshot] == ["Big", "Small"]

    @pytest.mark.asyncio
    async def test_closing_stream_releases_listener(self, database):
        stream = database.groups.observe_ordered()
        await _next(stream)
        assert database.group_table.listener_count == 1

        await stream.aclose()
        assert database.group_table.listener_count == 0


class TestClose:
    """Tests for a closed database."""

    @pytest.mark.asyncio
    async def test_calls_fail_after_close(self, database):
        group_id = await database.groups.upsert(Group(name="Trip"))
        database.close()
        assert database.is_closed

        with pytest.raises(StoreUnavailableError):
            await database.groups.get_by_id(group_id)
        with pytest.raises(StoreUnavailableError):
            await database.groups.upsert(Group(name="Flat"))
        with pytest.raises(StoreUnavailableError):
            await database.groups.delete(group_id)

    @pytest.mark.asyncio
    async def test_open_stream_fails_on_close(self, database):
        stream = database.groups.observe_ordered()
        await _next(stream)

        database.close()
        with pytest.raises(StoreUnavailableError):
            await _next(stream)
        assert database.group_table.listener_count == 0
