"""Day classification.

Every day of a year is assigned the single category that wins on priority
among all categories containing it.  Lower priority numbers win; ties go to
the lexicographically smallest category name so the result never depends on
mapping order.
"""

from __future__ import annotations

import datetime
from collections import Counter
from collections.abc import Callable, Mapping
from typing import NamedTuple

from loguru import logger

from lifecalendar.categories import CategorySet
from lifecalendar.synthetic import days_in_year, year_dates

PriorityFn = Callable[[str], int]
"""Signature: priority(category_name) -> int.  Must be defined for every name."""


class DayInfo(NamedTuple):
    """The winning category of one day."""

    category: str
    priority: int


class CategoryStat(NamedTuple):
    name: str
    priority: int
    days: int


def classify_day(
    day: datetime.date,
    category_set: CategorySet,
    priority: PriorityFn,
) -> DayInfo | None:
    """Return the winning category for *day*, or ``None`` if no category has it."""
    best: DayInfo | None = None
    for name in category_set.names():
        if day not in category_set.dates_of(name):
            continue
        p = priority(name)
        # names are visited in sorted order, so strict < keeps the smallest on ties
        if best is None or p < best.priority:
            best = DayInfo(category=name, priority=p)
    return best


def classify_year(
    category_set: CategorySet,
    priority: PriorityFn,
) -> dict[datetime.date, DayInfo]:
    """Map each categorized day of the year to its :class:`DayInfo`.

    Uncategorized days are absent from the result.
    """
    priorities = {name: priority(name) for name in category_set.names()}

    result: dict[datetime.date, DayInfo] = {}
    for day in year_dates(category_set.year):
        info = classify_day(day, category_set, priorities.__getitem__)
        if info is not None:
            result[day] = info

    logger.debug(
        "Classified {} of {} days in {}",
        len(result),
        days_in_year(category_set.year),
        category_set.year,
    )
    return result


def category_stats(day_infos: Mapping[datetime.date, DayInfo]) -> dict[str, int]:
    """Number of days won by each category."""
    return dict(Counter(info.category for info in day_infos.values()))


def sorted_stats(stats: Mapping[str, int], priority: PriorityFn) -> list[CategoryStat]:
    """Non-zero stats ordered by priority, then name."""
    rows = [
        CategoryStat(name=name, priority=priority(name), days=days)
        for name, days in stats.items()
        if days > 0
    ]
    rows.sort(key=lambda s: (s.priority, s.name))
    return rows
