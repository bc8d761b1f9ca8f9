"""
Group Details Screen

Shows one group with two independent live lists, its bills and its
members, each with its own order selection and its own subscription slot.
The group header is a third live slot, so a rename or delete made
elsewhere reaches the screen.
Reordering bills never touches the members subscription and vice versa.
"""

from decimal import Decimal
from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from spliteasy.models.bill import Bill
from spliteasy.models.events import (
    ChangeBillOrder,
    ChangeMemberOrder,
    DeleteBill,
    DeleteMember,
    GroupDetailsEvent,
)
from spliteasy.models.group import Group
from spliteasy.models.member import Member
from spliteasy.models.order import BillOrder, MemberOrder
from spliteasy.mutations import BillMutations, MemberMutations
from spliteasy.queries import BillQueries, GroupQueries, MemberQueries
from spliteasy.services.storage import NotFoundError
from spliteasy.state.base import Synchronizer

logger = structlog.get_logger(__name__)

GROUP_SLOT = "group"
BILLS_SLOT = "bills"
MEMBERS_SLOT = "members"


class GroupDetailsState(BaseModel):
    model_config = ConfigDict(frozen=True)

    group: Optional[Group] = None
    bills: list[Bill] = Field(default_factory=list)
    bill_order: BillOrder = Field(default_factory=BillOrder)
    members: list[Member] = Field(default_factory=list)
    member_order: MemberOrder = Field(default_factory=MemberOrder)

    @property
    def total_amount(self) -> Decimal:
        """Sum of every bill amount in the group (bills without one count as 0)."""
        return sum(
            (bill.amount for bill in self.bills if bill.amount is not None),
            Decimal("0"),
        )


class GroupDetailsSynchronizer(Synchronizer[GroupDetailsState]):
    """Keeps GroupDetailsState in step with the store for one group."""

    def __init__(
        self,
        group_id: int,
        group_queries: GroupQueries,
        bill_queries: BillQueries,
        member_queries: MemberQueries,
        bill_mutations: BillMutations,
        member_mutations: MemberMutations,
    ):
        super().__init__(GroupDetailsState())
        self.group_id = group_id
        self._group_queries = group_queries
        self._bill_queries = bill_queries
        self._member_queries = member_queries
        self._bill_mutations = bill_mutations
        self._member_mutations = member_mutations

    async def start(self) -> None:
        """Subscribe to the group header and both lists."""
        self._resubscribe(
            GROUP_SLOT,
            lambda: self._group_queries.observe_group(self.group_id),
            self._on_group,
        )
        self._get_bills(self.state.bill_order)
        self._get_members(self.state.member_order)

    def _on_group(self, groups: list[Group]) -> None:
        group = groups[0] if groups else None
        if group is None:
            self._notify("This group no longer exists")
        self._update(group=group)

    async def on_event(self, event: GroupDetailsEvent) -> None:
        if isinstance(event, ChangeBillOrder):
            self._get_bills(event.order)
        elif isinstance(event, ChangeMemberOrder):
            self._get_members(event.order)
        elif isinstance(event, DeleteBill):
            await self._delete("bill", event.bill_id, self._bill_mutations.delete_bill)
        elif isinstance(event, DeleteMember):
            await self._delete("member", event.member_id, self._member_mutations.delete_member)
        else:
            raise TypeError(f"Unsupported group details intent: {type(event).__name__}")

    def _get_bills(self, order: BillOrder) -> None:
        self._resubscribe(
            BILLS_SLOT,
            lambda: self._bill_queries.get_bills_ordered(self.group_id, order),
            lambda bills: self._update(bills=bills, bill_order=order),
        )

    def _get_members(self, order: MemberOrder) -> None:
        self._resubscribe(
            MEMBERS_SLOT,
            lambda: self._member_queries.get_members_ordered(self.group_id, order),
            lambda members: self._update(members=members, member_order=order),
        )

    async def _delete(self, entity_type: str, entity_id: int, delete) -> None:
        try:
            await delete(entity_id)
        except NotFoundError:
            self._notify(f"This {entity_type} no longer exists")
        except Exception as e:
            logger.error(
                "delete_failed",
                entity_type=entity_type,
                entity_id=entity_id,
                error=str(e),
            )
            self._notify(f"Could not delete the {entity_type}. Please try again.")
