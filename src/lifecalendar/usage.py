"""Working-day usage and weekend/holiday counting."""

from __future__ import annotations

import datetime
from collections.abc import Collection, Iterable
from typing import NamedTuple

from lifecalendar.categories import (
    PERSONAL_DAYS,
    PUBLIC_HOLIDAYS,
    VACATIONS,
    CategorySet,
    date_range,
)
from lifecalendar.synthetic import is_weekend

_ONE_DAY = datetime.timedelta(days=1)


class Usage(NamedTuple):
    """Working days consumed by planned leave in one year."""

    year: int
    vacation_days: int
    personal_days: int


def count_weekends_and_holidays(
    start: datetime.date,
    end: datetime.date,
    holidays: Collection[datetime.date],
) -> tuple[int, int]:
    """Return ``(weekend_days, holidays)`` inside the inclusive range.

    The two counts are independent: a holiday on a Saturday counts in both.
    """
    weekend_count = 0
    holiday_count = 0
    for d in date_range(start, end):
        if is_weekend(d):
            weekend_count += 1
        if d in holidays:
            holiday_count += 1
    return weekend_count, holiday_count


def continuous_ranges(dates: Iterable[datetime.date]) -> list[tuple[datetime.date, datetime.date]]:
    """Group *dates* into sorted maximal runs of consecutive days."""
    ordered = sorted(set(dates))
    if not ordered:
        return []

    ranges: list[tuple[datetime.date, datetime.date]] = []
    start = prev = ordered[0]
    for d in ordered[1:]:
        if d == prev + _ONE_DAY:
            prev = d
        else:
            ranges.append((start, prev))
            start = prev = d
    ranges.append((start, prev))
    return ranges


def working_days_used(category_set: CategorySet, name: str) -> int:
    """Days of category *name* in the set's year that cost actual leave.

    Weekend days and public holidays inside a leave block are free and are not
    counted.  A missing category counts as zero.
    """
    year = category_set.year
    holidays = category_set.dates_of(PUBLIC_HOLIDAYS)
    in_year = (d for d in category_set.dates_of(name) if d.year == year)

    total = 0
    for start, end in continuous_ranges(in_year):
        total += sum(
            1 for d in date_range(start, end) if not is_weekend(d) and d not in holidays
        )
    return total


def usage_summary(category_set: CategorySet) -> Usage:
    return Usage(
        year=category_set.year,
        vacation_days=working_days_used(category_set, VACATIONS),
        personal_days=working_days_used(category_set, PERSONAL_DAYS),
    )
