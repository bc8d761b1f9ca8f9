"""
State Synchronizers Package

One synchronizer per screen. Each owns an immutable state snapshot,
publishes it to watchers, and emits one-off UI events on `events`.
"""

from spliteasy.state.forms import (
    INVALID_FORM_MESSAGE,
    BillFormState,
    BillFormSynchronizer,
    DateFieldState,
    EditFormSynchronizer,
    FormStatus,
    GroupFormState,
    GroupFormSynchronizer,
    MemberFormState,
    MemberFormSynchronizer,
    TextFieldState,
)
from spliteasy.state.group_details import (
    BILLS_SLOT,
    GROUP_SLOT,
    MEMBERS_SLOT,
    GroupDetailsState,
    GroupDetailsSynchronizer,
)
from spliteasy.state.groups import GROUPS_SLOT, GroupsState, GroupsSynchronizer
from spliteasy.state.observable import EventChannel, StateContainer
from spliteasy.state.subscription import LiveSubscription

__all__ = [
    "BILLS_SLOT",
    "GROUP_SLOT",
    "GROUPS_SLOT",
    "MEMBERS_SLOT",
    "INVALID_FORM_MESSAGE",
    "BillFormState",
    "BillFormSynchronizer",
    "DateFieldState",
    "EditFormSynchronizer",
    "EventChannel",
    "FormStatus",
    "GroupDetailsState",
    "GroupDetailsSynchronizer",
    "GroupFormState",
    "GroupFormSynchronizer",
    "GroupsState",
    "GroupsSynchronizer",
    "LiveSubscription",
    "MemberFormState",
    "MemberFormSynchronizer",
    "StateContainer",
    "TextFieldState",
]
