"""Member model: a person taking part in a group's expenses."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Member(BaseModel):
    """
    A member of a group.

    Members are ordered by name; like bills they are removed together
    with their group.
    """
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(
        default=None,
        description="Assigned by the store on first insert"
    )
    group_id: int = Field(
        ...,
        description="ID of the owning group"
    )
    name: str
