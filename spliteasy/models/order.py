"""
Order Selection Models

An order selection is the pair (field, direction) the user picked for a
list. It says nothing about HOW to sort; see spliteasy.ordering for the
comparator built from it.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class OrderType(str, Enum):
    """Sort direction."""
    ASCENDING = "ascending"
    DESCENDING = "descending"


class GroupOrderField(str, Enum):
    """Fields a group list can be sorted by."""
    NAME = "name"
    CREATED = "created"  # insertion order, i.e. by id


class BillOrderField(str, Enum):
    """Fields a bill list can be sorted by."""
    NAME = "name"
    DATE = "date"
    AMOUNT = "amount"


class MemberOrderField(str, Enum):
    """Fields a member list can be sorted by."""
    NAME = "name"


class GroupOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    by: GroupOrderField = GroupOrderField.CREATED
    order_type: OrderType = OrderType.DESCENDING


class BillOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    by: BillOrderField = BillOrderField.DATE
    order_type: OrderType = OrderType.DESCENDING


class MemberOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    by: MemberOrderField = MemberOrderField.NAME
    order_type: OrderType = OrderType.ASCENDING
