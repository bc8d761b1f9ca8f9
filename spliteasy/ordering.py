"""
Ordering Policy

Turns an order selection (field + direction) into a comparator.

GUARANTEES:
- Total order: records with distinct ids never compare equal,
  because ties on the chosen field fall back to the id (ascending)
- The direction applies to the chosen field only, never to the tie-break
- Pure: the same comparator serves as the store's sort instruction
  and for re-sorting lists already in memory
"""

from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Any, Callable, Iterable, Optional, Union

from spliteasy.models.bill import Bill
from spliteasy.models.group import Group
from spliteasy.models.member import Member
from spliteasy.models.order import (
    BillOrder,
    BillOrderField,
    GroupOrder,
    GroupOrderField,
    MemberOrder,
    MemberOrderField,
    OrderType,
)

OrderSelection = Union[GroupOrder, BillOrder, MemberOrder]
Comparator = Callable[[Any, Any], int]


def _name_key(entity) -> str:
    return entity.name.casefold()


def _date_key(bill) -> Optional[datetime]:
    """Bill date with naive values read as UTC, so naive and aware dates compare."""
    if bill.date is None or bill.date.tzinfo is not None:
        return bill.date
    return bill.date.replace(tzinfo=timezone.utc)


# Keyed by selection class first: the field enums are str-based, so
# BillOrderField.NAME == MemberOrderField.NAME == "name".
_SORT_KEYS: dict[type, dict[Any, Callable[[Any], Any]]] = {
    GroupOrder: {
        GroupOrderField.NAME: _name_key,
        GroupOrderField.CREATED: lambda group: group.id,
    },
    BillOrder: {
        BillOrderField.NAME: _name_key,
        BillOrderField.DATE: _date_key,
        BillOrderField.AMOUNT: lambda bill: bill.amount,
    },
    MemberOrder: {
        MemberOrderField.NAME: _name_key,
    },
}


def _compare_values(left: Any, right: Any) -> int:
    """Three-way compare where None sorts before any present value."""
    if left is None or right is None:
        return (left is not None) - (right is not None)
    return (left > right) - (left < right)


def comparator(order: OrderSelection) -> Comparator:
    """
    Build the comparator for an order selection.

    Returns:
        compare(a, b) -> negative, zero or positive, like a classic cmp
    """
    try:
        key = _SORT_KEYS[type(order)][order.by]
    except KeyError:
        raise ValueError(f"No sort key for {type(order).__name__}.{order.by}")

    sign = 1 if order.order_type == OrderType.ASCENDING else -1

    def compare(left, right) -> int:
        result = sign * _compare_values(key(left), key(right))
        if result:
            return result
        return _compare_values(left.id, right.id)

    return compare


def sort_key(order: OrderSelection) -> Callable[[Any], Any]:
    """Key function for sorted()/list.sort()."""
    return cmp_to_key(comparator(order))


def sort(
    items: Iterable[Union[Group, Bill, Member]],
    order: OrderSelection,
) -> list:
    """Return a new list of items in the selected order."""
    return sorted(items, key=sort_key(order))
