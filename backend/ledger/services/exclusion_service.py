"""
Resolution of a recurring series against its exclusions.

A deletion exclusion hides the occurrence on its date, a modification
exclusion swaps in the replacement entry it points to, and every other
occurrence is a copy of the anchor entry moved to the generated date.
"""

import logging
from typing import Dict, Iterable, Iterator, Optional
from datetime import date, datetime

from ledger.models.exclusion import ExclusionReason
from ledger.schemas.entry import EntryDetails, PopulatedEntry
from ledger.schemas.recurring import RecurringConfigResponse
from ledger.services.occurrence_service import (
    is_unbounded,
    iter_occurrence_dates,
    occurrence_date,
)

logger = logging.getLogger(__name__)


def index_exclusions(exclusions: Iterable) -> Dict[date, object]:
    """
    Map occurrence date to the exclusion that governs it.
    Deleted exclusions are ignored; a deletion beats a modification on the
    same date, and among modifications the newest wins.
    """
    ordered = sorted(exclusions, key=lambda e: e.created_at or datetime.min)

    by_date: Dict[date, object] = {}
    for exclusion in ordered:
        if exclusion.is_deleted:
            continue
        current = by_date.get(exclusion.date)
        if current is None or current.reason != ExclusionReason.deletion:
            by_date[exclusion.date] = exclusion
    return by_date


class SeriesResolver:
    """Turns one config, its anchor and its exclusions into feed lines."""

    def __init__(
        self,
        config,
        anchor: EntryDetails,
        exclusions: Iterable,
        replacements: Dict[str, EntryDetails]
    ):
        self.config = config
        self.anchor = anchor
        self.replacements = replacements
        self.by_date = index_exclusions(exclusions)
        self.config_response = RecurringConfigResponse.model_validate(config)

    def _populate(self, index: int, when: date) -> Optional[PopulatedEntry]:
        exclusion = self.by_date.get(when)
        details = self.anchor.model_copy(update={"date": when})
        exclusion_id = None

        if exclusion is not None:
            if exclusion.reason == ExclusionReason.deletion:
                return None
            details = self.replacements.get(exclusion.modified_entry_id)
            if details is None:
                logger.warning(
                    f"Exclusion {exclusion.id} points to missing entry "
                    f"{exclusion.modified_entry_id}, hiding occurrence {when}"
                )
                return None
            exclusion_id = exclusion.id

        return PopulatedEntry(
            id=details.entry_id,
            date=when,
            index=index,
            interval=self.config.interval,
            config=self.config_response,
            recurring_config_id=self.config.id,
            exclusion_id=exclusion_id,
            details=details,
        )

    def iter_entries(self, horizon: date) -> Iterator[PopulatedEntry]:
        """
        Effective occurrences in index order. Finite series ignore the
        horizon; unbounded ones stop after it.
        """
        for index, when in iter_occurrence_dates(self.config, until=horizon):
            populated = self._populate(index, when)
            if populated is not None:
                yield populated

    def resolve(self, index: int) -> Optional[PopulatedEntry]:
        """The effective occurrence at index, or None if it is excluded or out of range."""
        if index < 1:
            return None
        if not is_unbounded(self.config) and index > self.config.interval:
            return None

        when = occurrence_date(self.config, index)
        if is_unbounded(self.config) and self.config.end_date is not None and when > self.config.end_date:
            return None
        return self._populate(index, when)


def resolve_series(
    config,
    anchor: EntryDetails,
    exclusions: Iterable,
    replacements: Dict[str, EntryDetails],
    horizon: date
) -> Iterator[PopulatedEntry]:
    """Lazily yield the effective entries of one recurring series."""
    return SeriesResolver(config, anchor, exclusions, replacements).iter_entries(horizon)
