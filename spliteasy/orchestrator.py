"""
Main Orchestrator for SplitEasy

This module ties the components together: storage, use cases, the audit
logger, and one factory per screen synchronizer.

DESIGN DECISION: The orchestrator enforces the boundaries:
- Screens only reach storage through query and mutation use cases
- Every mutation is audited
- All screens share one store, so a write on one screen shows up in
  every other screen's live lists
"""

from typing import Optional

import structlog

from spliteasy.audit import AuditLogger, configure_logging
from spliteasy.config import get_settings
from spliteasy.mutations import BillMutations, GroupMutations, MemberMutations
from spliteasy.queries import BillQueries, GroupQueries, MemberQueries
from spliteasy.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
    InMemoryDatabase,
)
from spliteasy.state import (
    BillFormSynchronizer,
    GroupDetailsSynchronizer,
    GroupFormSynchronizer,
    GroupsSynchronizer,
    MemberFormSynchronizer,
)

logger = structlog.get_logger(__name__)


class AppComponents:
    """
    Everything a presentation layer needs, wired to one database.

    Usage:
        components = create_app_components()
        screen = components.groups_screen()
        await screen.start()
    """

    def __init__(
        self,
        database: InMemoryDatabase,
        audit_logger: AuditLogger,
    ):
        self.database = database
        self.audit_logger = audit_logger

        settings = get_settings()

        self.group_queries = GroupQueries(database.groups)
        self.bill_queries = BillQueries(database.bills)
        self.member_queries = MemberQueries(database.members)

        self.group_mutations = GroupMutations(
            database.groups, audit_logger, settings.group
        )
        self.bill_mutations = BillMutations(
            database.bills, audit_logger, settings.bill
        )
        self.member_mutations = MemberMutations(
            database.members, audit_logger, settings.member
        )

    def groups_screen(self) -> GroupsSynchronizer:
        return GroupsSynchronizer(self.group_queries, self.group_mutations)

    def group_details_screen(self, group_id: int) -> GroupDetailsSynchronizer:
        return GroupDetailsSynchronizer(
            group_id=group_id,
            group_queries=self.group_queries,
            bill_queries=self.bill_queries,
            member_queries=self.member_queries,
            bill_mutations=self.bill_mutations,
            member_mutations=self.member_mutations,
        )

    def group_form(self, group_id: Optional[int] = None) -> GroupFormSynchronizer:
        return GroupFormSynchronizer(
            self.group_queries,
            self.group_mutations,
            group_id=group_id,
        )

    def bill_form(
        self,
        group_id: int,
        bill_id: Optional[int] = None,
    ) -> BillFormSynchronizer:
        return BillFormSynchronizer(
            group_id,
            self.bill_queries,
            self.bill_mutations,
            bill_id=bill_id,
        )

    def member_form(
        self,
        group_id: int,
        member_id: Optional[int] = None,
    ) -> MemberFormSynchronizer:
        return MemberFormSynchronizer(
            group_id,
            self.member_queries,
            self.member_mutations,
            member_id=member_id,
        )


def create_app_components(
    database: Optional[InMemoryDatabase] = None,
    audit_storage: Optional[AuditStorageInterface] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        database: Store to use; a fresh in-memory database if None
        audit_storage: Where audit events are persisted; in-memory if None

    Returns:
        AppComponents wired to the database
    """
    app_settings = get_settings().app
    configure_logging("DEBUG" if app_settings.debug_mode else app_settings.log_level)

    if database is None:
        database = InMemoryDatabase()
    if audit_storage is None:
        audit_storage = InMemoryAuditStorage()
    audit_logger = AuditLogger(audit_storage)

    logger.info(
        "app_components_created",
        environment=app_settings.app_environment,
        audit_storage=type(audit_storage).__name__,
    )
    return AppComponents(database, audit_logger)
