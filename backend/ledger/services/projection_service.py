"""
Projection of the store into the ordered entry feed.

The feed is rebuilt from scratch on every refresh. Rows are mapped
defensively: incomplete rows are dropped and group/tag references that no
longer resolve are shown as absent instead of failing the refresh.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from datetime import date

from dateutil.relativedelta import relativedelta

from ledger.config import settings
from ledger.schemas.entry import EntryDetails, GroupSummary, PopulatedEntry, TagSummary
from ledger.services.exclusion_service import SeriesResolver
from ledger.store.base import LedgerStore

logger = logging.getLogger(__name__)


@dataclass
class SeriesSnapshot:
    """Everything needed to resolve one recurring series."""
    config: object
    anchor: EntryDetails
    exclusions: list
    replacements: Dict[str, EntryDetails]

    def resolver(self) -> SeriesResolver:
        return SeriesResolver(self.config, self.anchor, self.exclusions, self.replacements)


@dataclass
class Snapshot:
    groups: list = field(default_factory=list)
    tags: list = field(default_factory=list)
    standalone: List[EntryDetails] = field(default_factory=list)
    series: List[SeriesSnapshot] = field(default_factory=list)
    recurring_configs: list = field(default_factory=list)


@dataclass
class Projection:
    """Read model handed to callers after each refresh."""
    horizon: date
    entries: List[PopulatedEntry]
    groups: list
    tags: list
    recurring_configs: list


def default_horizon(today: Optional[date] = None) -> date:
    """Last date unbounded series are projected to."""
    today = today or date.today()
    return today + relativedelta(months=settings.projection_horizon_months)


def map_entry(row, groups_by_id: Dict[str, object], tags_by_id: Dict[str, object]) -> Optional[EntryDetails]:
    """Convert an entry row to details, or None if the row is unusable."""
    if row.is_deleted:
        return None
    if not row.name or not row.type or not row.amount or not row.currency_code or row.date is None:
        logger.debug(f"Skipping incomplete entry {row.id}")
        return None

    group = groups_by_id.get(row.group_id) if row.group_id else None
    tag = tags_by_id.get(row.tag_id) if row.tag_id else None

    return EntryDetails(
        entry_id=row.id,
        name=row.name,
        type=row.type,
        amount=row.amount,
        currency_code=row.currency_code,
        date=row.date,
        fullfilled=bool(row.fullfilled),
        recurring_id=row.recurring_id,
        group_id=row.group_id,
        tag_id=row.tag_id,
        group=GroupSummary(group_id=group.id, name=group.name) if group else None,
        tag=TagSummary(tag_id=tag.id, name=tag.name, color=tag.color) if tag else None,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def load_lookups(store: LedgerStore):
    """Live groups and tags, plus id lookups for them."""
    groups = [g for g in store.groups.list(order_by="created_at") if g.name]
    tags = [t for t in store.tags.list(order_by="created_at") if t.name]
    return groups, tags, {g.id: g for g in groups}, {t.id: t for t in tags}


def load_series(
    store: LedgerStore,
    configs: list,
    groups_by_id: Dict[str, object],
    tags_by_id: Dict[str, object]
) -> List[SeriesSnapshot]:
    """Fetch anchors, replacements and exclusions for the given configs."""
    if not configs:
        return []

    config_ids = [c.id for c in configs]
    entry_rows = store.entries.list(recurring_id=config_ids)
    # Deleted exclusions are needed to recognise replacement entries
    exclusion_rows = store.exclusions.list(include_deleted=True, order_by="created_at", recurring_id=config_ids)

    result = []
    for config in configs:
        exclusions = [e for e in exclusion_rows if e.recurring_id == config.id]
        referenced = {e.modified_entry_id for e in exclusions if e.modified_entry_id}

        details = {}
        for row in entry_rows:
            if row.recurring_id != config.id:
                continue
            mapped = map_entry(row, groups_by_id, tags_by_id)
            if mapped is not None:
                details[mapped.entry_id] = mapped

        if not details:
            logger.warning(f"Recurring config {config.id} has no anchor entry, skipping")
            continue

        # Anchor: earliest entry that is not a replacement; a split series'
        # anchor is also its first replacement
        anchor = sorted(
            details.values(),
            key=lambda d: (d.entry_id in referenced, d.created_at)
        )[0]

        result.append(SeriesSnapshot(
            config=config,
            anchor=anchor,
            exclusions=[e for e in exclusions if not e.is_deleted],
            replacements=details,
        ))
    return result


def load_snapshot(store: LedgerStore) -> Snapshot:
    """Read every live row the feed depends on."""
    groups, tags, groups_by_id, tags_by_id = load_lookups(store)

    standalone = []
    for row in store.entries.list(order_by="date", recurring_id=None):
        mapped = map_entry(row, groups_by_id, tags_by_id)
        if mapped is not None:
            standalone.append(mapped)

    configs = store.recurring_configs.list(order_by="created_at")
    series = load_series(store, configs, groups_by_id, tags_by_id)

    return Snapshot(
        groups=groups,
        tags=tags,
        standalone=standalone,
        series=series,
        recurring_configs=configs,
    )


def build_feed(snapshot: Snapshot, horizon: date) -> List[PopulatedEntry]:
    """Merge standalone entries and every resolved series, ordered by date."""
    feed = [
        PopulatedEntry(id=details.entry_id, date=details.date, details=details)
        for details in snapshot.standalone
    ]
    for series in snapshot.series:
        feed.extend(series.resolver().iter_entries(horizon))

    feed.sort(key=lambda e: (e.date, e.details.created_at))
    return feed


def project(store: LedgerStore, horizon: Optional[date] = None) -> Projection:
    """Load the store and build the full read model."""
    horizon = horizon or default_horizon()
    snapshot = load_snapshot(store)
    return Projection(
        horizon=horizon,
        entries=build_feed(snapshot, horizon),
        groups=snapshot.groups,
        tags=snapshot.tags,
        recurring_configs=snapshot.recurring_configs,
    )
