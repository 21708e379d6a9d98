"""Categories computed from the calendar alone.

Weekends, ISO-week parity and *today* are derived from the year on every run;
they are never loaded from disk.  :func:`with_synthetic` layers them on top of
a loaded :class:`~lifecalendar.categories.CategorySet` without touching it.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable, Iterator

from loguru import logger

from lifecalendar.categories import Category, CategorySet, SyntheticKind

_ONE_DAY = datetime.timedelta(days=1)

# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------


def is_leap_year(year: int) -> bool:
    """Gregorian rule: every 4th year, except centuries not divisible by 400."""
    if year % 400 == 0:
        return True
    if year % 100 == 0:
        return False
    return year % 4 == 0


def days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def year_dates(year: int) -> Iterator[datetime.date]:
    """Yield Jan 1 .. Dec 31 of *year* in ascending order."""
    current = datetime.date(year, 1, 1)
    for _ in range(days_in_year(year)):
        yield current
        current += _ONE_DAY


def is_weekend(d: datetime.date) -> bool:
    return d.weekday() >= 5  # Saturday, Sunday


def iso_week(d: datetime.date) -> int:
    """ISO-8601 week number; may belong to the adjacent ISO year."""
    return d.isocalendar()[1]


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


def _select(year: int, predicate: Callable[[datetime.date], bool]) -> frozenset[datetime.date]:
    return frozenset(d for d in year_dates(year) if predicate(d))


def weekends(year: int) -> Category:
    return Category(
        name=SyntheticKind.WEEKENDS.value,
        kind=SyntheticKind.WEEKENDS.value,
        dates=_select(year, is_weekend),
    )


def odd_weeks(year: int) -> Category:
    return Category(
        name=SyntheticKind.ODD_WEEK.value,
        kind=SyntheticKind.ODD_WEEK.value,
        dates=_select(year, lambda d: iso_week(d) % 2 == 1),
    )


def even_weeks(year: int) -> Category:
    return Category(
        name=SyntheticKind.EVEN_WEEK.value,
        kind=SyntheticKind.EVEN_WEEK.value,
        dates=_select(year, lambda d: iso_week(d) % 2 == 0),
    )


def current_day(year: int, today: datetime.date) -> Category | None:
    """The single day *today*, or ``None`` when *today* is outside *year*."""
    if today.year != year:
        return None
    return Category(
        name=SyntheticKind.CURRENT_DAY.value,
        kind=SyntheticKind.CURRENT_DAY.value,
        dates=frozenset({today}),
    )


def synthetic_categories(year: int, *, today: datetime.date) -> list[Category]:
    """All synthetic categories for *year*; ``current_day`` only if applicable."""
    categories = [weekends(year), odd_weeks(year), even_weeks(year)]
    today_category = current_day(year, today)
    if today_category is not None:
        categories.append(today_category)
    return categories


def with_synthetic(category_set: CategorySet, *, today: datetime.date) -> CategorySet:
    """Return a copy of *category_set* augmented with the synthetic layers.

    Synthetic categories replace any loaded category of the same name.
    """
    layers = synthetic_categories(category_set.year, today=today)
    shadowed = [c.name for c in layers if category_set.has(c.name)]
    if shadowed:
        logger.debug(
            "Synthetic categories replace loaded ones for {}: {}",
            category_set.year,
            ", ".join(shadowed),
        )
    return category_set.merged(layers)
