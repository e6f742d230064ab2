"""Tests for resolving a series against its exclusions."""

import pytest
from datetime import date, datetime

from ledger.models.entry import EntryType
from ledger.models.exclusion import Exclusion, ExclusionReason
from ledger.models.recurring_config import RecurringConfig, Frequency
from ledger.schemas.entry import EntryDetails
from ledger.services.exclusion_service import SeriesResolver, resolve_series

HORIZON = date(2030, 1, 1)


def make_details(entry_id, amount="1200.00000000", fullfilled=False, on=date(2024, 1, 1)):
    return EntryDetails(
        entry_id=entry_id,
        name="Rent",
        type=EntryType.expense,
        amount=amount,
        currency_code="USD",
        date=on,
        fullfilled=fullfilled,
        recurring_id="cfg-1",
        created_at=datetime(2024, 1, 1),
        updated_at=datetime(2024, 1, 1),
    )


def make_exclusion(exclusion_id, on, reason, modified_entry_id=None, is_deleted=False, created_at=None):
    return Exclusion(
        id=exclusion_id,
        recurring_id="cfg-1",
        date=on,
        reason=reason,
        modified_entry_id=modified_entry_id,
        is_deleted=is_deleted,
        created_at=created_at,
    )


@pytest.fixture
def config():
    return RecurringConfig(
        id="cfg-1",
        frequency=Frequency.month,
        interval=12,
        every=1,
        start_date=date(2024, 1, 1),
        end_date=None,
        created_at=datetime(2024, 1, 1),
    )


@pytest.fixture
def anchor():
    return make_details("anchor")


class TestResolveSeries:
    """Test series resolution."""

    def test_no_exclusions(self, config, anchor):
        """Every occurrence should copy the anchor with its own date."""
        result = list(resolve_series(config, anchor, [], {}, HORIZON))
        assert len(result) == 12
        assert [e.index for e in result] == list(range(1, 13))
        assert result[4].date == date(2024, 5, 1)
        assert result[4].details.date == date(2024, 5, 1)
        assert all(e.details.amount == "1200.00000000" for e in result)
        assert all(e.interval == 12 for e in result)
        assert all(e.recurring_config_id == "cfg-1" for e in result)
        assert all(e.exclusion_id is None for e in result)

    def test_deletion_omits_occurrence(self, config, anchor):
        """A deletion should remove exactly that occurrence."""
        exclusions = [make_exclusion("ex-1", date(2024, 3, 1), ExclusionReason.deletion)]
        result = list(resolve_series(config, anchor, exclusions, {}, HORIZON))
        assert len(result) == 11
        assert date(2024, 3, 1) not in [e.date for e in result]
        # Indices are not renumbered
        assert [e.index for e in result][:3] == [1, 2, 4]

    def test_modification_uses_replacement(self, config, anchor):
        """A modification should show the replacement entry's fields."""
        replacement = make_details("repl-1", amount="999.00000000", fullfilled=True, on=date(2024, 5, 1))
        exclusions = [
            make_exclusion("ex-1", date(2024, 5, 1), ExclusionReason.modification, "repl-1"),
        ]
        result = list(resolve_series(config, anchor, exclusions, {"repl-1": replacement}, HORIZON))

        fifth = result[4]
        assert fifth.index == 5
        assert fifth.exclusion_id == "ex-1"
        assert fifth.id == "repl-1"
        assert fifth.details.amount == "999.00000000"
        assert fifth.details.fullfilled is True
        assert result[3].details.amount == "1200.00000000"

    def test_deletion_beats_modification(self, config, anchor):
        """A deletion and a modification on one date should hide the occurrence."""
        replacement = make_details("repl-1", on=date(2024, 5, 1))
        exclusions = [
            make_exclusion("ex-1", date(2024, 5, 1), ExclusionReason.modification, "repl-1"),
            make_exclusion("ex-2", date(2024, 5, 1), ExclusionReason.deletion),
        ]
        result = list(resolve_series(config, anchor, exclusions, {"repl-1": replacement}, HORIZON))
        assert len(result) == 11

    def test_newest_modification_wins(self, config, anchor):
        """Two modifications on one date should resolve to the newer one, whatever the input order."""
        replacements = {
            "old": make_details("old", amount="1250.00000000", on=date(2024, 5, 1)),
            "new": make_details("new", amount="1300.00000000", on=date(2024, 5, 1)),
        }
        older = make_exclusion("ex-1", date(2024, 5, 1), ExclusionReason.modification, "old",
                               created_at=datetime(2024, 2, 1))
        newer = make_exclusion("ex-2", date(2024, 5, 1), ExclusionReason.modification, "new",
                               created_at=datetime(2024, 3, 1))

        for exclusions in ([older, newer], [newer, older]):
            result = list(resolve_series(config, anchor, exclusions, replacements, HORIZON))
            assert result[4].exclusion_id == "ex-2"
            assert result[4].details.amount == "1300.00000000"

    def test_older_deletion_still_wins(self, config, anchor):
        """A deletion should hide the occurrence even if a modification came later."""
        replacement = make_details("repl-1", on=date(2024, 5, 1))
        exclusions = [
            make_exclusion("ex-2", date(2024, 5, 1), ExclusionReason.modification, "repl-1",
                           created_at=datetime(2024, 3, 1)),
            make_exclusion("ex-1", date(2024, 5, 1), ExclusionReason.deletion,
                           created_at=datetime(2024, 2, 1)),
        ]
        result = list(resolve_series(config, anchor, exclusions, {"repl-1": replacement}, HORIZON))
        assert date(2024, 5, 1) not in [e.date for e in result]

    def test_deleted_exclusion_ignored(self, config, anchor):
        """Soft-deleted exclusions should have no effect."""
        exclusions = [make_exclusion("ex-1", date(2024, 3, 1), ExclusionReason.deletion, is_deleted=True)]
        result = list(resolve_series(config, anchor, exclusions, {}, HORIZON))
        assert len(result) == 12

    def test_missing_replacement_hidden(self, config, anchor):
        """A modification whose entry is gone should hide the occurrence."""
        exclusions = [
            make_exclusion("ex-1", date(2024, 5, 1), ExclusionReason.modification, "missing"),
        ]
        result = list(resolve_series(config, anchor, exclusions, {}, HORIZON))
        assert len(result) == 11

    def test_exclusion_on_non_occurrence_date(self, config, anchor):
        """Exclusions on dates the series never hits should be ignored."""
        exclusions = [make_exclusion("ex-1", date(2024, 3, 2), ExclusionReason.deletion)]
        result = list(resolve_series(config, anchor, exclusions, {}, HORIZON))
        assert len(result) == 12

    def test_unbounded_uses_horizon(self, config, anchor):
        """Unbounded series should stop at the horizon."""
        config.interval = 0
        result = list(resolve_series(config, anchor, [], {}, date(2024, 6, 30)))
        assert len(result) == 6
        assert all(e.interval == 0 for e in result)


class TestResolveSingle:
    """Test resolving one occurrence by index."""

    def test_resolve_index(self, config, anchor):
        """Should return the occurrence at the index."""
        populated = SeriesResolver(config, anchor, [], {}).resolve(5)
        assert populated.index == 5
        assert populated.date == date(2024, 5, 1)

    def test_resolve_out_of_range(self, config, anchor):
        """Indices past the interval should not resolve."""
        assert SeriesResolver(config, anchor, [], {}).resolve(13) is None
        assert SeriesResolver(config, anchor, [], {}).resolve(0) is None

    def test_resolve_deleted(self, config, anchor):
        """Deleted occurrences should not resolve."""
        exclusions = [make_exclusion("ex-1", date(2024, 5, 1), ExclusionReason.deletion)]
        assert SeriesResolver(config, anchor, exclusions, {}).resolve(5) is None
