"""
Intents and UI Events

Intents flow from the presentation layer into a synchronizer.
UI events flow back out (notifications, "saved, navigate away").

DESIGN DECISION: One small model per variant. Synchronizers dispatch
with an isinstance chain that ends in a TypeError, so an intent nobody
handles fails loudly instead of being dropped.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from spliteasy.models.order import BillOrder, GroupOrder, MemberOrder


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# FORM INTENTS
# =============================================================================

class EnteredName(_Event):
    value: str


class EnteredDescription(_Event):
    value: str


class EnteredAmount(_Event):
    """Raw text typed into the amount field; parsed by the form."""
    value: str


class EnteredDate(_Event):
    value: Optional[datetime] = None


class SaveForm(_Event):
    pass


FormEvent = Union[EnteredName, EnteredDescription, EnteredAmount, EnteredDate, SaveForm]


# =============================================================================
# LIST INTENTS
# =============================================================================

class ChangeGroupOrder(_Event):
    order: GroupOrder


class ChangeBillOrder(_Event):
    order: BillOrder


class ChangeMemberOrder(_Event):
    order: MemberOrder


class DeleteGroup(_Event):
    group_id: int


class DeleteBill(_Event):
    bill_id: int


class DeleteMember(_Event):
    member_id: int


GroupsEvent = Union[ChangeGroupOrder, DeleteGroup]
GroupDetailsEvent = Union[ChangeBillOrder, ChangeMemberOrder, DeleteBill, DeleteMember]


# =============================================================================
# UI EVENTS (synchronizer -> presentation)
# =============================================================================

class ShowNotification(_Event):
    """A one-off message for the user (snackbar, toast...)."""
    message: str


class EntitySaved(_Event):
    """The form finished; the presentation layer should navigate away."""
    entity_id: int


UiEvent = Union[ShowNotification, EntitySaved]
