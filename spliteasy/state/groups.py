"""Groups screen: the live, sortable list of every group."""

import structlog
from pydantic import BaseModel, ConfigDict, Field

from spliteasy.models.events import ChangeGroupOrder, DeleteGroup, GroupsEvent
from spliteasy.models.group import Group
from spliteasy.models.order import GroupOrder
from spliteasy.mutations import GroupMutations
from spliteasy.queries import GroupQueries
from spliteasy.services.storage import NotFoundError
from spliteasy.state.base import Synchronizer

logger = structlog.get_logger(__name__)

GROUPS_SLOT = "groups"


class GroupsState(BaseModel):
    model_config = ConfigDict(frozen=True)

    groups: list[Group] = Field(default_factory=list)
    group_order: GroupOrder = Field(default_factory=GroupOrder)


class GroupsSynchronizer(Synchronizer[GroupsState]):
    """
    Keeps GroupsState in step with the store.

    The published group_order always matches the list it is shown with:
    both are applied together when a snapshot arrives.
    """

    def __init__(
        self,
        queries: GroupQueries,
        mutations: GroupMutations,
    ):
        super().__init__(GroupsState())
        self._queries = queries
        self._mutations = mutations

    async def start(self) -> None:
        self._get_groups(self.state.group_order)

    async def on_event(self, event: GroupsEvent) -> None:
        if isinstance(event, ChangeGroupOrder):
            self._get_groups(event.order)
        elif isinstance(event, DeleteGroup):
            await self._delete_group(event.group_id)
        else:
            raise TypeError(f"Unsupported groups intent: {type(event).__name__}")

    def _get_groups(self, order: GroupOrder) -> None:
        self._resubscribe(
            GROUPS_SLOT,
            lambda: self._queries.get_groups_ordered(order),
            lambda groups: self._update(groups=groups, group_order=order),
        )

    async def _delete_group(self, group_id: int) -> None:
        try:
            await self._mutations.delete_group(group_id)
        except NotFoundError:
            self._notify("This group no longer exists")
        except Exception as e:
            logger.error("group_delete_failed", group_id=group_id, error=str(e))
            self._notify("Could not delete the group. Please try again.")
