"""
Core Data Models for SplitEasy

These models define the shapes of the records kept in storage.
They are designed to:
1. Carry types only, never field limits
2. Be immutable once built (updates go through model_copy)
3. Signal "not yet persisted" with id=None

DESIGN DECISION: Length and range limits are NOT enforced here.
A stored bill that breaks a limit (e.g. imported with a blank name)
must still load, so the form can flag the problem instead of crashing.
The validation engine is the single authority on limits.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Bill(BaseModel):
    """
    A single expense inside a group.

    CRITICAL: group_id is a back-reference used for lookup only.
    The group owns the bill, never the other way around.
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
    name: str = Field(
        ...,
        description="Short name of the expense"
    )
    description: Optional[str] = None
    amount: Optional[Decimal] = Field(
        default=None,
        description="Amount spent"
    )
    date: Optional[datetime] = Field(
        default=None,
        description="When the expense happened"
    )

    @property
    def is_persisted(self) -> bool:
        return self.id is not None
