"""
Pydantic schemas package.
"""

from ledger.schemas.group import GroupCreate, GroupResponse
from ledger.schemas.tag import TagCreate, TagUpdate, TagResponse, TagSuggestion
from ledger.schemas.recurring import RecurrenceCreate, RecurringConfigResponse
from ledger.schemas.entry import (
    EntryCreate,
    EntryDetails,
    GroupSummary,
    TagSummary,
    PopulatedEntry,
)
from ledger.schemas.occurrence import (
    OccurrenceRef,
    ToggleFulfilledRequest,
    EditOccurrenceRequest,
    DeleteOccurrenceRequest,
    MutationResponse,
)
from ledger.schemas.feed import FeedResponse

__all__ = [
    "GroupCreate",
    "GroupResponse",
    "TagCreate",
    "TagUpdate",
    "TagResponse",
    "TagSuggestion",
    "RecurrenceCreate",
    "RecurringConfigResponse",
    "EntryCreate",
    "EntryDetails",
    "GroupSummary",
    "TagSummary",
    "PopulatedEntry",
    "OccurrenceRef",
    "ToggleFulfilledRequest",
    "EditOccurrenceRequest",
    "DeleteOccurrenceRequest",
    "MutationResponse",
    "FeedResponse",
]
