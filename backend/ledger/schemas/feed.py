"""
Feed read-model schema.
"""

from pydantic import BaseModel
from datetime import date

from ledger.schemas.entry import PopulatedEntry
from ledger.schemas.group import GroupResponse
from ledger.schemas.recurring import RecurringConfigResponse
from ledger.schemas.tag import TagResponse


class FeedResponse(BaseModel):
    horizon: date
    entries: list[PopulatedEntry]
    groups: list[GroupResponse]
    tags: list[TagResponse]
    recurring_configs: list[RecurringConfigResponse]
    total: int
