"""Group model: the root scope that owns bills and members."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Group(BaseModel):
    """
    A group of people sharing expenses.

    Deleting a group deletes every bill and member that belongs to it.
    """
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(
        default=None,
        description="Assigned by the store on first insert"
    )
    name: str = Field(
        ...,
        description="Group name"
    )
