"""
Occurrence date generation for recurring configs.

Month and year steps are always taken from the series start date in one
jump, using relativedelta. When the target month is too short the day is
clamped to the month's last day, so a series starting on Jan 31 runs
Jan 31, Feb 29 (or 28), Mar 31, Apr 30. Exclusions are keyed by exact
date, so this rule must not change once data exists.
"""

from typing import Iterator, Optional
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from ledger.models.recurring_config import Frequency


def step_delta(frequency: Frequency, steps: int):
    """Offset covering `steps` units of `frequency`."""
    frequency = Frequency(frequency)
    if frequency == Frequency.week:
        return timedelta(weeks=steps)
    elif frequency == Frequency.month:
        return relativedelta(months=steps)
    elif frequency == Frequency.year:
        return relativedelta(years=steps)
    raise ValueError(f"Unsupported frequency: {frequency}")


def occurrence_date(config, index: int) -> date:
    """
    Date of the index-th occurrence (1-based) of a recurring config.

    Raises ValueError for index < 1.
    """
    if index < 1:
        raise ValueError(f"Occurrence index must be >= 1, got {index}")

    every = config.every or 1
    return config.start_date + step_delta(config.frequency, (index - 1) * every)


def is_unbounded(config) -> bool:
    return not config.interval


def iter_occurrence_dates(config, until: Optional[date] = None) -> Iterator[tuple]:
    """
    Yield (index, date) pairs for a config.

    Finite configs yield exactly `interval` occurrences. Unbounded configs
    stop after `until` or `end_date`, whichever comes first; with neither
    set the iterator never ends.
    """
    limit = until
    if is_unbounded(config) and config.end_date is not None:
        limit = config.end_date if limit is None else min(limit, config.end_date)

    index = 1
    while True:
        if not is_unbounded(config) and index > config.interval:
            return
        current = occurrence_date(config, index)
        if is_unbounded(config) and limit is not None and current > limit:
            return
        yield index, current
        index += 1
