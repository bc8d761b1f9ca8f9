"""
Query Use Cases

DESIGN DECISION: Queries are thin and stateless.
They translate (scope, order selection) into a live view request on the
store. No caching happens here; liveness and consistency are the store's
responsibility.
"""

from typing import AsyncIterator, Optional

from spliteasy.models.bill import Bill
from spliteasy.models.group import Group
from spliteasy.models.member import Member
from spliteasy.models.order import BillOrder, GroupOrder, MemberOrder
from spliteasy.ordering import comparator
from spliteasy.services.storage import EntityStorageInterface


class GroupQueries:
    """Read access to groups."""

    def __init__(self, storage: EntityStorageInterface[Group]):
        self._storage = storage

    def get_groups_ordered(
        self,
        order: Optional[GroupOrder] = None,
    ) -> AsyncIterator[list[Group]]:
        """Live view of every group in the selected order."""
        return self._storage.observe_ordered(
            where=None,
            comparator=comparator(order or GroupOrder()),
        )

    def observe_group(self, group_id: int) -> AsyncIterator[list[Group]]:
        """Live view of one group: [group] while it exists, [] once it is gone."""
        return self._storage.observe_ordered(where=lambda group: group.id == group_id)

    async def get_group_by_id(self, group_id: int) -> Optional[Group]:
        return await self._storage.get_by_id(group_id)


class BillQueries:
    """Read access to bills, always scoped to one group."""

    def __init__(self, storage: EntityStorageInterface[Bill]):
        self._storage = storage

    def get_bills_ordered(
        self,
        group_id: int,
        order: Optional[BillOrder] = None,
    ) -> AsyncIterator[list[Bill]]:
        """
        Live view of a group's bills in the selected order.

        The first snapshot is the current state; a new one follows every
        change to a bill of this group (including a cascade from deleting
        the group, which yields an empty list).
        """
        return self._storage.observe_ordered(
            where=lambda bill: bill.group_id == group_id,
            comparator=comparator(order or BillOrder()),
        )

    async def get_bill_by_id(self, bill_id: int) -> Optional[Bill]:
        """Single-shot read, used to initialize the edit form."""
        return await self._storage.get_by_id(bill_id)


class MemberQueries:
    """Read access to members, always scoped to one group."""

    def __init__(self, storage: EntityStorageInterface[Member]):
        self._storage = storage

    def get_members_ordered(
        self,
        group_id: int,
        order: Optional[MemberOrder] = None,
    ) -> AsyncIterator[list[Member]]:
        return self._storage.observe_ordered(
            where=lambda member: member.group_id == group_id,
            comparator=comparator(order or MemberOrder()),
        )

    async def get_member_by_id(self, member_id: int) -> Optional[Member]:
        return await self._storage.get_by_id(member_id)
