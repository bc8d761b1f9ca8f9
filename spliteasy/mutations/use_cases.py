"""
Mutation Use Cases

Validate-then-write operations for groups, bills and members.

CRITICAL: The store is never called with a record that fails a field
check. Every upsert re-runs ALL checks of the candidate record, even if
the form already did, and refuses the whole write on any failure.
There are no partial writes.

Store errors (NotFoundError, StoreUnavailableError) are audited and then
propagate unchanged to the caller.
"""

from typing import Callable, Generic, Optional, TypeVar

from spliteasy.audit import AuditLogger
from spliteasy.config import BillSettings, GroupSettings, MemberSettings
from spliteasy.models.bill import Bill
from spliteasy.models.group import Group
from spliteasy.models.member import Member
from spliteasy.models.validation import ValidationResult
from spliteasy.services.storage import EntityStorageInterface, StorageError
from spliteasy.validation import (
    ValidationFailedError,
    validate_bill,
    validate_group,
    validate_member,
)

EntityT = TypeVar("EntityT", Group, Bill, Member)


class _EntityMutations(Generic[EntityT]):
    """Shared validate-then-write flow; subclasses name the operations."""

    entity_type = "entity"

    def __init__(
        self,
        storage: EntityStorageInterface[EntityT],
        validator: Callable[[EntityT], ValidationResult],
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validate = validator
        self._audit_logger = audit_logger or AuditLogger()

    async def _upsert(self, entity: EntityT) -> int:
        result = self._validate(entity)
        if not result.is_valid:
            await self._audit_logger.log_validation_failed(result)
            raise ValidationFailedError(result)

        try:
            entity_id = await self._storage.upsert(entity)
        except StorageError as e:
            await self._audit_logger.log_save_failed(
                entity_type=self.entity_type,
                entity_id=entity.id,
                error_message=str(e),
            )
            raise

        await self._audit_logger.log_entity_saved(
            entity_type=self.entity_type,
            entity_id=entity_id,
            created=entity.id is None,
            name=entity.name,
        )
        return entity_id

    async def _delete(self, entity_id: int) -> None:
        try:
            await self._storage.delete(entity_id)
        except StorageError as e:
            await self._audit_logger.log_delete_failed(
                entity_type=self.entity_type,
                entity_id=entity_id,
                error_message=str(e),
            )
            raise

        await self._audit_logger.log_entity_deleted(
            entity_type=self.entity_type,
            entity_id=entity_id,
        )


class GroupMutations(_EntityMutations[Group]):
    entity_type = "group"

    def __init__(
        self,
        storage: EntityStorageInterface[Group],
        audit_logger: Optional[AuditLogger] = None,
        rules: Optional[GroupSettings] = None,
    ):
        super().__init__(
            storage,
            lambda group: validate_group(group, rules),
            audit_logger,
        )

    async def upsert_group(self, group: Group) -> int:
        """
        Create or update a group.

        Returns:
            The group's id

        Raises:
            ValidationFailedError: If any field check fails (nothing written)
            NotFoundError: If updating a group that no longer exists
        """
        return await self._upsert(group)

    async def delete_group(self, group_id: int) -> None:
        """Delete a group; its bills and members go with it."""
        await self._delete(group_id)


class BillMutations(_EntityMutations[Bill]):
    entity_type = "bill"

    def __init__(
        self,
        storage: EntityStorageInterface[Bill],
        audit_logger: Optional[AuditLogger] = None,
        rules: Optional[BillSettings] = None,
    ):
        super().__init__(
            storage,
            lambda bill: validate_bill(bill, rules),
            audit_logger,
        )

    async def upsert_bill(self, bill: Bill) -> int:
        """
        Create or update a bill.

        Returns:
            The bill's id

        Raises:
            ValidationFailedError: If any field check fails (nothing written)
            NotFoundError: If updating a vanished bill, or the group is gone
        """
        return await self._upsert(bill)

    async def delete_bill(self, bill_id: int) -> None:
        await self._delete(bill_id)


class MemberMutations(_EntityMutations[Member]):
    entity_type = "member"

    def __init__(
        self,
        storage: EntityStorageInterface[Member],
        audit_logger: Optional[AuditLogger] = None,
        rules: Optional[MemberSettings] = None,
    ):
        super().__init__(
            storage,
            lambda member: validate_member(member, rules),
            audit_logger,
        )

    async def upsert_member(self, member: Member) -> int:
        return await self._upsert(member)

    async def delete_member(self, member_id: int) -> None:
        await self._delete(member_id)
