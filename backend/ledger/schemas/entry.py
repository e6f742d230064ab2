"""
Entry and projection schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from ledger.models.entry import EntryType
from ledger.schemas.recurring import RecurrenceCreate, RecurringConfigResponse


class EntryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: EntryType
    amount: Decimal
    currency_code: Optional[str] = Field(None, min_length=3, max_length=3)
    date: date
    fullfilled: bool = False
    group_id: Optional[str] = None
    tag_id: Optional[str] = None
    recurrence: Optional[RecurrenceCreate] = None


class GroupSummary(BaseModel):
    group_id: str
    name: str


class TagSummary(BaseModel):
    tag_id: str
    name: str
    color: Optional[str] = None


class EntryDetails(BaseModel):
    """Entry fields with group and tag names resolved."""
    entry_id: str
    name: str
    type: EntryType
    amount: str
    currency_code: str
    date: date
    fullfilled: bool
    recurring_id: Optional[str] = None
    group_id: Optional[str] = None
    tag_id: Optional[str] = None
    group: Optional[GroupSummary] = None
    tag: Optional[TagSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        frozen = True


class PopulatedEntry(BaseModel):
    """
    One line of the projected feed.

    index is the 1-based occurrence number within a series (0 for
    standalone entries) and interval the series length (0 = unbounded).
    exclusion_id is set when the occurrence is materialized.
    """
    id: str
    date: date
    index: int = 0
    interval: int = 0
    config: Optional[RecurringConfigResponse] = None
    recurring_config_id: Optional[str] = None
    exclusion_id: Optional[str] = None
    details: EntryDetails

    class Config:
        frozen = True

    @property
    def is_standalone(self) -> bool:
        return self.recurring_config_id is None
