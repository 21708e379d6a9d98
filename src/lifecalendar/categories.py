"""Category data model.

A *category* is a named set of calendar days, optionally backed by labeled
date ranges (entries).  A :class:`CategorySet` groups every category of one
year; it is built once and then only read.
"""

from __future__ import annotations

import datetime
import enum
import re
from collections.abc import Iterable, Iterator, Mapping
from typing import NamedTuple

from lifecalendar.errors import InvalidDate, InvalidRange

PUBLIC_HOLIDAYS = "public_holidays"
VACATIONS = "vacations"
PERSONAL_DAYS = "personal_days"

PLACEHOLDER_LABEL = "Event"

_ONE_DAY = datetime.timedelta(days=1)
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class SyntheticKind(str, enum.Enum):
    """Kinds of categories computed from the calendar alone."""

    WEEKENDS = "weekends"
    ODD_WEEK = "odd_week"
    EVEN_WEEK = "even_week"
    CURRENT_DAY = "current_day"


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class CategoryEntry(NamedTuple):
    """A labeled, inclusive date range."""

    start_date: datetime.date
    end_date: datetime.date
    label: str = ""

    @property
    def total_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def __str__(self) -> str:
        if self.start_date == self.end_date:
            return f"{self.start_date.strftime('%b %d')}: {self.label}"
        return (
            f"{self.start_date.strftime('%b %d')} - "
            f"{self.end_date.strftime('%b %d')}: {self.label}"
        )


class Category(NamedTuple):
    """A named set of days plus the entries they were expanded from."""

    name: str
    kind: str
    dates: frozenset[datetime.date]
    entries: tuple[CategoryEntry, ...] = ()
    description: str = ""

    @property
    def is_synthetic(self) -> bool:
        return self.kind in {k.value for k in SyntheticKind}

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ")

    def labeled_entries(self) -> list[CategoryEntry]:
        """Entries carrying a real label (not empty, not the placeholder)."""
        return [e for e in self.entries if e.label and e.label != PLACEHOLDER_LABEL]


class CategorySet(NamedTuple):
    """All categories of one year, keyed by name."""

    year: int
    categories: Mapping[str, Category]

    def has(self, name: str) -> bool:
        return name in self.categories

    def ordered(self) -> list[Category]:
        """Categories in name order."""
        return [self.categories[name] for name in sorted(self.categories)]

    def get(self, name: str) -> Category | None:
        return self.categories.get(name)

    def dates_of(self, name: str) -> frozenset[datetime.date]:
        """Days of category *name*, or an empty set when it is absent."""
        category = self.categories.get(name)
        if category is None:
            return frozenset()
        return category.dates

    def names(self) -> list[str]:
        return sorted(self.categories)

    def merged(self, extra: Iterable[Category]) -> CategorySet:
        """Return a new set with *extra* layered on top (same names replaced)."""
        combined = dict(self.categories)
        for category in extra:
            combined[category.name] = category
        return CategorySet(year=self.year, categories=combined)


class LabeledCategory(NamedTuple):
    """A category reduced to its labeled entries, for display and export."""

    name: str
    display_name: str
    description: str
    entries: list[CategoryEntry]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def parse_date(value: str) -> datetime.date:
    """Parse a ``YYYY-MM-DD`` date string, raising :class:`InvalidDate`."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value.strip()):
        raise InvalidDate(value)
    try:
        return datetime.date.fromisoformat(value.strip())
    except ValueError:
        raise InvalidDate(value) from None


def date_range(start: datetime.date, end: datetime.date) -> Iterator[datetime.date]:
    """Yield every day from *start* to *end*, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += _ONE_DAY


def make_entry(
    start: datetime.date | None,
    end: datetime.date | None,
    label: str = "",
) -> CategoryEntry:
    """Build a validated entry.

    Raises :class:`InvalidRange` if a date is missing or *end* precedes *start*.
    """
    if start is None or end is None:
        raise InvalidRange(f"Missing date in entry {label!r}")
    if end < start:
        raise InvalidRange(
            f"Entry {label!r} ends ({end.isoformat()}) before it starts "
            f"({start.isoformat()})"
        )
    return CategoryEntry(start_date=start, end_date=end, label=label)


def category_from_entries(
    name: str,
    entries: Iterable[CategoryEntry],
    *,
    kind: str | None = None,
    description: str = "",
) -> Category:
    """Expand *entries* into a category whose date-set covers every entry day."""
    checked = tuple(make_entry(e.start_date, e.end_date, e.label) for e in entries)
    dates: set[datetime.date] = set()
    for entry in checked:
        dates.update(date_range(entry.start_date, entry.end_date))
    return Category(
        name=name,
        kind=kind if kind is not None else name,
        dates=frozenset(dates),
        entries=checked,
        description=description or name,
    )


def labeled_categories(
    category_set: CategorySet,
    *,
    exclude: Iterable[str] = (),
) -> list[LabeledCategory]:
    """Categories having at least one labeled entry, sorted by display name."""
    skip = set(exclude)
    result: list[LabeledCategory] = []
    for category in category_set.ordered():
        if category.name in skip:
            continue
        entries = category.labeled_entries()
        if entries:
            result.append(
                LabeledCategory(
                    name=category.name,
                    display_name=category.display_name,
                    description=category.description,
                    entries=entries,
                )
            )
    result.sort(key=lambda c: c.display_name)
    return result
