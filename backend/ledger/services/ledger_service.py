"""
Ledger mutations and the projection they refresh.

Occurrences are never edited through their recurrence rule. Editing or
toggling one occurrence materializes it: a replacement entry plus a
modification exclusion. Changing a series from one occurrence onwards
splits it into two non-overlapping configs. Every multi-step mutation runs
its writes in a fixed order without a transaction; a failure after the
first committed write is reported as a PartialSequenceFailure and nothing
is rolled back.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from datetime import date
from decimal import Decimal, InvalidOperation

from ledger.config import settings
from ledger.errors import AuthRequired, InvalidInput, LedgerError, NotFound, PartialSequenceFailure
from ledger.models.entry import EntryType
from ledger.models.exclusion import ExclusionReason
from ledger.models.recurring_config import Frequency
from ledger.schemas.entry import PopulatedEntry
from ledger.services.projection_service import (
    Projection,
    default_horizon,
    load_lookups,
    load_series,
    map_entry,
    project,
)
from ledger.store.base import EntityTable, LedgerStore

logger = logging.getLogger(__name__)


def format_amount(amount) -> str:
    """Store amounts as fixed 8-decimal strings."""
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount!r}")
    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    return f"{value:.8f}"


@dataclass
class MutationResult:
    success: bool
    id: Optional[str] = None
    error: Optional[LedgerError] = None


class Saga:
    """Records which steps of a mutation have been committed."""

    def __init__(self, operation: str):
        self.operation = operation
        self.completed: List[str] = []

    def step(self, name: str, func: Callable, *args: Any) -> Any:
        result = func(*args)
        self.completed.append(name)
        return result


class LedgerService:
    """
    Entry point for reading the feed and changing the ledger.

    Build one per store/session and pass it to whoever needs it. Public
    mutations never raise ledger errors; they return a MutationResult and,
    on success, refresh the projection unless skip_refresh is set.
    """

    def __init__(self, store: LedgerStore, horizon: Optional[date] = None):
        self.store = store
        self.horizon = horizon or default_horizon()
        self.projection: Optional[Projection] = None

    # Reads

    def refresh(self) -> Projection:
        """Re-read the store and replace the projection wholesale."""
        self.projection = project(self.store, self.horizon)
        return self.projection

    @property
    def entries(self) -> List[PopulatedEntry]:
        if self.projection is None:
            self.refresh()
        return self.projection.entries

    def locate(
        self,
        entry_id: Optional[str] = None,
        recurring_config_id: Optional[str] = None,
        index: Optional[int] = None
    ) -> PopulatedEntry:
        """
        Resolve a feed line straight from the store.

        Series occurrences are addressed by config id and index, standalone
        entries by entry id. Raises NotFound if the line is not visible.
        """
        _, _, groups_by_id, tags_by_id = load_lookups(self.store)

        if recurring_config_id is not None:
            config = self.store.recurring_configs.get(recurring_config_id)
            if config is None or config.is_deleted:
                raise NotFound(f"Recurring config {recurring_config_id} not found")
            series = load_series(self.store, [config], groups_by_id, tags_by_id)
            populated = series[0].resolver().resolve(index or 0) if series else None
            if populated is None:
                raise NotFound(f"Occurrence {index} of {recurring_config_id} not found")
            return populated

        row = self.store.entries.get(entry_id) if entry_id else None
        details = map_entry(row, groups_by_id, tags_by_id) if row is not None else None
        if details is None or details.recurring_id is not None:
            raise NotFound(f"Entry {entry_id} not found")
        return PopulatedEntry(id=details.entry_id, date=details.date, details=details)

    def series_entries(self, recurring_config_id: str) -> List[PopulatedEntry]:
        return [e for e in self.entries if e.recurring_config_id == recurring_config_id]

    # Plumbing

    def _run(
        self,
        operation: str,
        action: Callable[[Saga], Optional[str]],
        skip_refresh: bool = False
    ) -> MutationResult:
        saga = Saga(operation)
        try:
            if not self.store.user_id:
                raise AuthRequired()
            created_id = action(saga)
        except (LedgerError, ValueError) as e:
            # ValueError comes from enum coercion, amounts and occurrence indices
            error = e if isinstance(e, LedgerError) else InvalidInput(str(e))
            if saga.completed and not isinstance(error, PartialSequenceFailure):
                error = PartialSequenceFailure(operation, saga.completed, error)
            logger.error(f"{operation} failed: {error}")
            return MutationResult(success=False, error=error)

        logger.info(f"{operation} completed ({len(saga.completed)} writes)")

        if not skip_refresh:
            try:
                self.refresh()
            except LedgerError as e:
                logger.error(f"Refresh after {operation} failed: {e}")
                return MutationResult(success=False, id=created_id, error=e)
        return MutationResult(success=True, id=created_id)

    @staticmethod
    def _update(table: EntityTable, row_id: str, fields: Dict[str, Any]) -> None:
        if not table.update(row_id, fields):
            raise NotFound(f"{table.name} row {row_id} not found")

    @staticmethod
    def _entry_fields(entry: PopulatedEntry) -> Dict[str, Any]:
        details = entry.details
        return {
            "name": details.name,
            "type": details.type,
            "amount": details.amount,
            "currency_code": details.currency_code,
            "date": entry.date,
            "fullfilled": details.fullfilled,
            "recurring_id": entry.recurring_config_id,
            "group_id": details.group_id,
            "tag_id": details.tag_id,
        }

    def _materialize(self, saga: Saga, entry: PopulatedEntry, changes: Dict[str, Any]) -> str:
        """Replace an unmaterialized occurrence with an edited copy."""
        fields = self._entry_fields(entry)
        fields.update(changes)
        new_entry_id = saga.step("create replacement entry", self.store.entries.insert, fields)
        saga.step("create modification exclusion", self.store.exclusions.insert, {
            "recurring_id": entry.recurring_config_id,
            "date": entry.date,
            "reason": ExclusionReason.modification,
            "modified_entry_id": new_entry_id,
        })
        return new_entry_id

    def _is_series_anchor(self, entry: PopulatedEntry) -> bool:
        config = self.store.recurring_configs.get(entry.recurring_config_id)
        if config is None:
            return False
        series = load_series(self.store, [config], {}, {})
        return bool(series) and series[0].anchor.entry_id == entry.details.entry_id

    def _apply_to_occurrence(self, saga: Saga, entry: PopulatedEntry, changes: Dict[str, Any]) -> str:
        """Update a materialized or standalone entry in place, otherwise materialize."""
        if entry.exclusion_id and self._is_series_anchor(entry):
            # First occurrence of a split series: its entry is also the template
            fields = self._entry_fields(entry)
            fields.update(changes)
            new_entry_id = saga.step("create replacement entry", self.store.entries.insert, fields)
            saga.step("repoint modification exclusion", self._update, self.store.exclusions,
                      entry.exclusion_id, {"modified_entry_id": new_entry_id})
            return new_entry_id
        if entry.exclusion_id or entry.is_standalone:
            saga.step("update entry", self._update, self.store.entries, entry.details.entry_id, changes)
            return entry.details.entry_id
        return self._materialize(saga, entry, changes)

    # Groups and tags

    def create_group(self, name: str, icon: Optional[str] = None, skip_refresh: bool = False) -> MutationResult:
        def action(saga: Saga) -> str:
            return saga.step("create group", self.store.groups.insert, {"name": name, "icon": icon})
        return self._run("create_group", action, skip_refresh)

    def delete_group(self, group_id: str, skip_refresh: bool = False) -> MutationResult:
        def action(saga: Saga) -> None:
            saga.step("delete group", self._update, self.store.groups, group_id, {"is_deleted": True})
        return self._run("delete_group", action, skip_refresh)

    def create_tag(
        self,
        name: str,
        color: Optional[str] = None,
        suggest_id: Optional[str] = None,
        skip_refresh: bool = False
    ) -> MutationResult:
        def action(saga: Saga) -> str:
            return saga.step("create tag", self.store.tags.insert, {
                "name": name,
                "color": color,
                "suggest_id": suggest_id,
            })
        return self._run("create_tag", action, skip_refresh)

    def update_tag_color(self, tag_id: str, color: Optional[str], skip_refresh: bool = False) -> MutationResult:
        def action(saga: Saga) -> None:
            saga.step("update tag", self._update, self.store.tags, tag_id, {"color": color})
        return self._run("update_tag_color", action, skip_refresh)

    def delete_tag(self, tag_id: str, skip_refresh: bool = False) -> MutationResult:
        def action(saga: Saga) -> None:
            saga.step("delete tag", self._update, self.store.tags, tag_id, {"is_deleted": True})
        return self._run("delete_tag", action, skip_refresh)

    # Raw entity writes

    def create_entry(
        self,
        name: str,
        entry_type: str,
        amount,
        entry_date: date,
        currency_code: Optional[str] = None,
        group_id: Optional[str] = None,
        tag_id: Optional[str] = None,
        fullfilled: bool = False,
        recurring_id: Optional[str] = None,
        skip_refresh: bool = False
    ) -> MutationResult:
        def action(saga: Saga) -> str:
            return saga.step("create entry", self.store.entries.insert, {
                "name": name,
                "type": EntryType(entry_type),
                "amount": format_amount(amount),
                "currency_code": currency_code or settings.default_currency,
                "date": entry_date,
                "group_id": group_id,
                "tag_id": tag_id,
                "fullfilled": fullfilled,
                "recurring_id": recurring_id,
            })
        return self._run("create_entry", action, skip_refresh)

    def create_recurring_config(
        self,
        frequency: Frequency,
        interval: int,
        start_date: date,
        every: int = 1,
        end_date: Optional[date] = None,
        skip_refresh: bool = False
    ) -> MutationResult:
        def action(saga: Saga) -> str:
            return saga.step("create recurring config", self.store.recurring_configs.insert, {
                "frequency": Frequency(frequency),
                "interval": interval,
                "every": every or 1,
                "start_date": start_date,
                "end_date": end_date,
            })
        return self._run("create_recurring_config", action, skip_refresh)

    def create_recurring_entry(
        self,
        name: str,
        entry_type: str,
        amount,
        start_date: date,
        frequency: Frequency,
        interval: int = 0,
        every: int = 1,
        end_date: Optional[date] = None,
        currency_code: Optional[str] = None,
        group_id: Optional[str] = None,
        tag_id: Optional[str] = None,
        skip_refresh: bool = False
    ) -> MutationResult:
        """Create a config and its anchor entry. Returns the config id."""
        def action(saga: Saga) -> str:
            config_id = saga.step("create recurring config", self.store.recurring_configs.insert, {
                "frequency": Frequency(frequency),
                "interval": interval,
                "every": every or 1,
                "start_date": start_date,
                "end_date": end_date,
            })
            saga.step("create anchor entry", self.store.entries.insert, {
                "name": name,
                "type": EntryType(entry_type),
                "amount": format_amount(amount),
                "currency_code": currency_code or settings.default_currency,
                "date": start_date,
                "group_id": group_id,
                "tag_id": tag_id,
                "fullfilled": False,
                "recurring_id": config_id,
            })
            return config_id
        return self._run("create_recurring_entry", action, skip_refresh)

    def create_exclusion(
        self,
        recurring_id: str,
        exclusion_date: date,
        reason: ExclusionReason,
        modified_entry_id: Optional[str] = None,
        skip_refresh: bool = False
    ) -> MutationResult:
        def action(saga: Saga) -> str:
            return saga.step("create exclusion", self.store.exclusions.insert, {
                "recurring_id": recurring_id,
                "date": exclusion_date,
                "reason": ExclusionReason(reason),
                "modified_entry_id": modified_entry_id,
            })
        return self._run("create_exclusion", action, skip_refresh)

    def update_entry(self, entry_id: str, values: Dict[str, Any], skip_refresh: bool = False) -> MutationResult:
        values = {k: v for k, v in values.items() if v is not None}

        def action(saga: Saga) -> None:
            if "amount" in values:
                values["amount"] = format_amount(values["amount"])
            saga.step("update entry", self._update, self.store.entries, entry_id, values)
        return self._run("update_entry", action, skip_refresh)

    def update_recurring_config(
        self,
        config_id: str,
        values: Dict[str, Any],
        skip_refresh: bool = False
    ) -> MutationResult:
        allowed = {"interval", "every", "end_date", "is_deleted"}
        values = {k: v for k, v in values.items() if k in allowed and v is not None}

        def action(saga: Saga) -> None:
            saga.step("update recurring config", self._update, self.store.recurring_configs, config_id, values)
        return self._run("update_recurring_config", action, skip_refresh)

    def update_exclusion(
        self,
        exclusion_id: str,
        reason: Optional[ExclusionReason] = None,
        is_deleted: Optional[bool] = None,
        skip_refresh: bool = False
    ) -> MutationResult:
        def action(saga: Saga) -> None:
            values: Dict[str, Any] = {}
            if reason is not None:
                values["reason"] = ExclusionReason(reason)
            if is_deleted is not None:
                values["is_deleted"] = is_deleted
            saga.step("update exclusion", self._update, self.store.exclusions, exclusion_id, values)
        return self._run("update_exclusion", action, skip_refresh)

    # Occurrence operations

    def toggle_fulfilled(self, entry: PopulatedEntry, skip_refresh: bool = False) -> MutationResult:
        """Flip the fulfilled flag of one feed line."""
        def action(saga: Saga) -> str:
            return self._apply_to_occurrence(saga, entry, {"fullfilled": not entry.details.fullfilled})
        return self._run("toggle_fulfilled", action, skip_refresh)

    def edit_entry(
        self,
        entry: PopulatedEntry,
        name: str,
        amount,
        group_id: Optional[str] = None,
        tag_id: Optional[str] = None,
        apply_to_subsequents: bool = False,
        skip_refresh: bool = False
    ) -> MutationResult:
        """
        Edit one feed line, or with apply_to_subsequents split its series
        so the edit holds from this occurrence on.
        """
        def action(saga: Saga) -> str:
            changes = {
                "name": name,
                "amount": format_amount(amount),
                "group_id": group_id,
                "tag_id": tag_id,
            }
            if apply_to_subsequents and not entry.is_standalone:
                return self._split_series(saga, entry, changes)
            return self._apply_to_occurrence(saga, entry, changes)
        return self._run("edit_entry", action, skip_refresh)

    def delete_entry(
        self,
        entry: PopulatedEntry,
        with_subsequents: bool = False,
        skip_refresh: bool = False
    ) -> MutationResult:
        """Delete one feed line, or with with_subsequents cut its series off here."""
        def action(saga: Saga) -> None:
            if with_subsequents and not entry.is_standalone:
                self._truncate_series(saga, entry)
            elif entry.exclusion_id:
                # Entry row is kept, only the exclusion changes meaning
                saga.step("mark exclusion as deletion", self._update, self.store.exclusions,
                          entry.exclusion_id, {"reason": ExclusionReason.deletion})
            elif entry.is_standalone:
                saga.step("delete entry", self._update, self.store.entries,
                          entry.details.entry_id, {"is_deleted": True})
            else:
                saga.step("create deletion exclusion", self.store.exclusions.insert, {
                    "recurring_id": entry.recurring_config_id,
                    "date": entry.date,
                    "reason": ExclusionReason.deletion,
                    "modified_entry_id": None,
                })
        return self._run("delete_entry", action, skip_refresh)

    def erase_all_data(self) -> MutationResult:
        """Hard-delete every row of the current user."""
        def action(saga: Saga) -> None:
            for table in self.store.tables():
                saga.step(f"purge {table.name}", table.purge)
        return self._run("erase_all_data", action)

    # Series operations

    def _live_config(self, entry: PopulatedEntry):
        config = self.store.recurring_configs.get(entry.recurring_config_id)
        if config is None or config.is_deleted:
            raise NotFound(f"Recurring config {entry.recurring_config_id} not found")
        return config

    def _truncate_series(self, saga: Saga, entry: PopulatedEntry) -> None:
        config_id = entry.recurring_config_id
        exclusions = self.store.exclusions.list(recurring_id=config_id)

        if entry.index <= 1:
            saga.step("delete recurring config", self._update, self.store.recurring_configs,
                      config_id, {"is_deleted": True})
            for exclusion in exclusions:
                saga.step(f"delete exclusion {exclusion.id}", self.store.exclusions.soft_delete, exclusion.id)
            return

        for exclusion in exclusions:
            if exclusion.date > entry.date:
                saga.step(f"delete exclusion {exclusion.id}", self.store.exclusions.soft_delete, exclusion.id)

        saga.step("truncate recurring config", self._update, self.store.recurring_configs, config_id, {
            "end_date": entry.date,
            "interval": entry.index - 1,
        })

    def _split_series(self, saga: Saga, entry: PopulatedEntry, changes: Dict[str, Any]) -> str:
        """Close the old series before entry and start a new one carrying the edit."""
        config = self._live_config(entry)
        when = entry.date
        # config is the live row; the truncation below rewrites it in place
        frequency = config.frequency
        every = config.every or 1
        old_interval = config.interval
        old_end_date = config.end_date

        for exclusion in self.store.exclusions.list(recurring_id=config.id):
            if exclusion.date > when:
                saga.step(f"delete exclusion {exclusion.id}", self.store.exclusions.soft_delete, exclusion.id)

        if entry.exclusion_id:
            saga.step("mark exclusion as deletion", self._update, self.store.exclusions,
                      entry.exclusion_id, {"reason": ExclusionReason.deletion})
        else:
            saga.step("create deletion exclusion", self.store.exclusions.insert, {
                "recurring_id": config.id,
                "date": when,
                "reason": ExclusionReason.deletion,
                "modified_entry_id": None,
            })

        if entry.index <= 1:
            # interval 0 would make the old series unbounded
            saga.step("delete recurring config", self._update, self.store.recurring_configs,
                      config.id, {"is_deleted": True})
        else:
            saga.step("truncate recurring config", self._update, self.store.recurring_configs, config.id, {
                "end_date": when,
                "interval": entry.index - 1,
            })

        new_config_id = saga.step("create recurring config", self.store.recurring_configs.insert, {
            "frequency": frequency,
            "interval": old_interval - entry.index + 1 if old_interval else 0,
            "every": every,
            "start_date": when,
            "end_date": old_end_date,
        })

        fields = self._entry_fields(entry)
        fields.update(changes)
        fields["recurring_id"] = new_config_id
        new_entry_id = saga.step("create anchor entry", self.store.entries.insert, fields)

        saga.step("create modification exclusion", self.store.exclusions.insert, {
            "recurring_id": new_config_id,
            "date": when,
            "reason": ExclusionReason.modification,
            "modified_entry_id": new_entry_id,
        })
        return new_config_id
