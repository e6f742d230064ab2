"""
Database models package.
"""

from ledger.models.group import EntryGroup
from ledger.models.tag import EntryTag
from ledger.models.entry import Entry, EntryType
from ledger.models.recurring_config import RecurringConfig, Frequency
from ledger.models.exclusion import Exclusion, ExclusionReason

__all__ = [
    "EntryGroup",
    "EntryTag",
    "Entry",
    "EntryType",
    "RecurringConfig",
    "Frequency",
    "Exclusion",
    "ExclusionReason",
]
