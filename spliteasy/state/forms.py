"""
Add/Edit Forms

State machine shared by every form:

    LOADING -> EDITING -> SUBMITTING -> SAVED
                  ^            |
                  +------------+  (invalid fields or failed write)

DESIGN DECISION: The same field checks run in three places:
1. Right after load, so bad data already in storage is flagged at once
2. On every field edit, for immediate feedback
3. Again on save, as the gate before the mutation use case is called

Intents that arrive while LOADING, SUBMITTING or SAVED are ignored.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Optional, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field

from spliteasy.config import BillSettings, GroupSettings, MemberSettings, get_settings
from spliteasy.models.bill import Bill
from spliteasy.models.events import (
    EnteredAmount,
    EnteredDate,
    EnteredDescription,
    EnteredName,
    EntitySaved,
    FormEvent,
    SaveForm,
)
from spliteasy.models.group import Group
from spliteasy.models.member import Member
from spliteasy.models.validation import InvalidInputError
from spliteasy.mutations import BillMutations, GroupMutations, MemberMutations
from spliteasy.queries import BillQueries, GroupQueries, MemberQueries
from spliteasy.services.storage import NotFoundError, StorageError
from spliteasy.state.base import Synchronizer
from spliteasy.validation import (
    ValidationFailedError,
    check_date,
    check_decimal,
    check_text,
    parse_decimal,
)

logger = structlog.get_logger(__name__)

INVALID_FORM_MESSAGE = "Please fill all fields correctly"


class FormStatus(str, Enum):
    LOADING = "loading"
    EDITING = "editing"
    SUBMITTING = "submitting"
    SAVED = "saved"


class TextFieldState(BaseModel):
    """Raw text as typed, plus its current error."""
    model_config = ConfigDict(frozen=True)

    value: str = ""
    error: Optional[InvalidInputError] = None


class DateFieldState(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: Optional[datetime] = None
    error: Optional[InvalidInputError] = None


class _FormState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: FormStatus = FormStatus.LOADING

    def field_states(self) -> dict[str, Any]:
        return {
            name: value for name, value in self
            if isinstance(value, (TextFieldState, DateFieldState))
        }

    @property
    def errors(self) -> dict[str, InvalidInputError]:
        return {
            name: field.error
            for name, field in self.field_states().items()
            if field.error is not None
        }

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


class GroupFormState(_FormState):
    name: TextFieldState = Field(default_factory=TextFieldState)


class BillFormState(_FormState):
    name: TextFieldState = Field(default_factory=TextFieldState)
    description: TextFieldState = Field(default_factory=TextFieldState)
    amount: TextFieldState = Field(default_factory=TextFieldState)
    date: DateFieldState = Field(default_factory=DateFieldState)


class MemberFormState(_FormState):
    name: TextFieldState = Field(default_factory=TextFieldState)


FormStateT = TypeVar("FormStateT", bound=_FormState)


class EditFormSynchronizer(ABC, Synchronizer[FormStateT]):
    """
    Shared load/edit/save flow.

    Subclasses provide the entity-specific steps:
    _fetch, _populate, _checked_fields, _apply_edit, _build_entity, _persist.
    """

    entity_label = "record"

    def __init__(self, initial_state: FormStateT, entity_id: Optional[int]):
        super().__init__(initial_state)
        self._entity_id = entity_id

    @property
    def entity_id(self) -> Optional[int]:
        """Id of the record being edited; None while it is a new record."""
        return self._entity_id

    async def load(self) -> None:
        """
        Fill the form from storage (or start blank) and enter EDITING.

        A record that no longer exists turns the form into a new record.
        A failed read keeps the id and leaves the form in LOADING, so
        load() can be called again.
        """
        if self.state.status != FormStatus.LOADING:
            return

        if self._entity_id is not None:
            try:
                entity = await self._fetch(self._entity_id)
            except StorageError as e:
                logger.error(
                    "form_load_failed",
                    entity_type=self.entity_label,
                    entity_id=self._entity_id,
                    error=str(e),
                )
                self._notify(f"Could not load the {self.entity_label}")
                return

            if entity is None:
                self._notify(f"This {self.entity_label} no longer exists")
                self._entity_id = None
            else:
                self._populate(entity)

        self._update(status=FormStatus.EDITING, **self._checked_fields())

    async def on_event(self, event: FormEvent) -> None:
        if self.state.status != FormStatus.EDITING:
            logger.debug(
                "intent_ignored",
                intent=type(event).__name__,
                status=self.state.status.value,
            )
            return

        if isinstance(event, SaveForm):
            await self._save()
        else:
            self._apply_edit(event)

    async def _save(self) -> None:
        self._update(status=FormStatus.SUBMITTING, **self._checked_fields())
        if self.state.has_errors:
            self._update(status=FormStatus.EDITING)
            self._notify(INVALID_FORM_MESSAGE)
            return

        try:
            entity_id = await self._persist(self._build_entity())
        except ValidationFailedError:
            self._update(status=FormStatus.EDITING)
            self._notify(INVALID_FORM_MESSAGE)
        except NotFoundError:
            self._update(status=FormStatus.EDITING)
            self._notify(
                f"Could not save: this {self.entity_label} or its group no longer exists"
            )
        except Exception as e:
            logger.error(
                "form_save_failed",
                entity_type=self.entity_label,
                entity_id=self._entity_id,
                error=str(e),
            )
            self._update(status=FormStatus.EDITING)
            self._notify(f"Could not save the {self.entity_label}. Please try again.")
        else:
            self._entity_id = entity_id
            self._update(status=FormStatus.SAVED)
            self.events.emit(EntitySaved(entity_id=entity_id))

    @abstractmethod
    async def _fetch(self, entity_id: int):
        pass

    @abstractmethod
    def _populate(self, entity) -> None:
        pass

    @abstractmethod
    def _checked_fields(self) -> dict[str, Any]:
        """Every field of the current state with its error recomputed."""
        pass

    @abstractmethod
    def _apply_edit(self, event: FormEvent) -> None:
        pass

    @abstractmethod
    def _build_entity(self):
        pass

    @abstractmethod
    async def _persist(self, entity) -> int:
        pass

    def _unsupported(self, event) -> TypeError:
        return TypeError(
            f"Unsupported {self.entity_label} form intent: {type(event).__name__}"
        )


class BillFormSynchronizer(EditFormSynchronizer[BillFormState]):
    """Add or edit one bill of a group."""

    entity_label = "bill"

    def __init__(
        self,
        group_id: int,
        queries: BillQueries,
        mutations: BillMutations,
        bill_id: Optional[int] = None,
        rules: Optional[BillSettings] = None,
    ):
        super().__init__(BillFormState(), bill_id)
        self.group_id = group_id
        self._queries = queries
        self._mutations = mutations
        self._rules = rules or get_settings().bill

    def _check_name(self, value: str) -> Optional[InvalidInputError]:
        return check_text(
            value,
            is_required=self._rules.is_name_required,
            min_length=self._rules.min_name_len,
            max_length=self._rules.max_name_len,
        )

    def _check_description(self, value: str) -> Optional[InvalidInputError]:
        return check_text(
            value,
            is_required=self._rules.is_desc_required,
            min_length=self._rules.min_desc_len,
            max_length=self._rules.max_desc_len,
        )

    def _check_amount(self, value: str) -> Optional[InvalidInputError]:
        return check_decimal(
            parse_decimal(value),
            is_required=self._rules.is_amount_required,
            max_value=self._rules.max_amount,
        )

    def _check_date(self, value: Optional[datetime]) -> Optional[InvalidInputError]:
        return check_date(value, is_required=self._rules.is_date_required)

    async def _fetch(self, entity_id: int) -> Optional[Bill]:
        return await self._queries.get_bill_by_id(entity_id)

    def _populate(self, bill: Bill) -> None:
        self._update(
            name=TextFieldState(value=bill.name),
            description=TextFieldState(value=bill.description or ""),
            amount=TextFieldState(
                value=str(bill.amount) if bill.amount is not None else ""
            ),
            date=DateFieldState(value=bill.date),
        )

    def _checked_fields(self) -> dict[str, Any]:
        state = self.state
        return {
            "name": state.name.model_copy(
                update={"error": self._check_name(state.name.value)}
            ),
            "description": state.description.model_copy(
                update={"error": self._check_description(state.description.value)}
            ),
            "amount": state.amount.model_copy(
                update={"error": self._check_amount(state.amount.value)}
            ),
            "date": state.date.model_copy(
                update={"error": self._check_date(state.date.value)}
            ),
        }

    def _apply_edit(self, event: FormEvent) -> None:
        if isinstance(event, EnteredName):
            self._update(name=TextFieldState(
                value=event.value,
                error=self._check_name(event.value),
            ))
        elif isinstance(event, EnteredDescription):
            self._update(description=TextFieldState(
                value=event.value,
                error=self._check_description(event.value),
            ))
        elif isinstance(event, EnteredAmount):
            self._update(amount=TextFieldState(
                value=event.value,
                error=self._check_amount(event.value),
            ))
        elif isinstance(event, EnteredDate):
            self._update(date=DateFieldState(
                value=event.value,
                error=self._check_date(event.value),
            ))
        else:
            raise self._unsupported(event)

    def _build_entity(self) -> Bill:
        state = self.state
        return Bill(
            id=self._entity_id,
            group_id=self.group_id,
            name=state.name.value.strip(),
            description=state.description.value.strip() or None,
            amount=parse_decimal(state.amount.value),
            date=state.date.value,
        )

    async def _persist(self, bill: Bill) -> int:
        return await self._mutations.upsert_bill(bill)


class GroupFormSynchronizer(EditFormSynchronizer[GroupFormState]):
    """Add or rename a group."""

    entity_label = "group"

    def __init__(
        self,
        queries: GroupQueries,
        mutations: GroupMutations,
        group_id: Optional[int] = None,
        rules: Optional[GroupSettings] = None,
    ):
        super().__init__(GroupFormState(), group_id)
        self._queries = queries
        self._mutations = mutations
        self._rules = rules or get_settings().group

    def _check_name(self, value: str) -> Optional[InvalidInputError]:
        return check_text(
            value,
            is_required=self._rules.is_name_required,
            min_length=self._rules.min_name_len,
            max_length=self._rules.max_name_len,
        )

    async def _fetch(self, entity_id: int) -> Optional[Group]:
        return await self._queries.get_group_by_id(entity_id)

    def _populate(self, group: Group) -> None:
        self._update(name=TextFieldState(value=group.name))

    def _checked_fields(self) -> dict[str, Any]:
        name = self.state.name
        return {"name": name.model_copy(update={"error": self._check_name(name.value)})}

    def _apply_edit(self, event: FormEvent) -> None:
        if isinstance(event, EnteredName):
            self._update(name=TextFieldState(
                value=event.value,
                error=self._check_name(event.value),
            ))
        else:
            raise self._unsupported(event)

    def _build_entity(self) -> Group:
        return Group(id=self._entity_id, name=self.state.name.value.strip())

    async def _persist(self, group: Group) -> int:
        return await self._mutations.upsert_group(group)


class MemberFormSynchronizer(EditFormSynchronizer[MemberFormState]):
    """Add or rename a member of a group."""

    entity_label = "member"

    def __init__(
        self,
        group_id: int,
        queries: MemberQueries,
        mutations: MemberMutations,
        member_id: Optional[int] = None,
        rules: Optional[MemberSettings] = None,
    ):
        super().__init__(MemberFormState(), member_id)
        self.group_id = group_id
        self._queries = queries
        self._mutations = mutations
        self._rules = rules or get_settings().member

    def _check_name(self, value: str) -> Optional[InvalidInputError]:
        return check_text(
            value,
            is_required=self._rules.is_name_required,
            min_length=self._rules.min_name_len,
            max_length=self._rules.max_name_len,
        )

    async def _fetch(self, entity_id: int) -> Optional[Member]:
        return await self._queries.get_member_by_id(entity_id)

    def _populate(self, member: Member) -> None:
        self._update(name=TextFieldState(value=member.name))

    def _checked_fields(self) -> dict[str, Any]:
        name = self.state.name
        return {"name": name.model_copy(update={"error": self._check_name(name.value)})}

    def _apply_edit(self, event: FormEvent) -> None:
        if isinstance(event, EnteredName):
            self._update(name=TextFieldState(
                value=event.value,
                error=self._check_name(event.value),
            ))
        else:
            raise self._unsupported(event)

    def _build_entity(self) -> Member:
        return Member(
            id=self._entity_id,
            group_id=self.group_id,
            name=self.state.name.value.strip(),
        )

    async def _persist(self, member: Member) -> int:
        return await self._mutations.upsert_member(member)
