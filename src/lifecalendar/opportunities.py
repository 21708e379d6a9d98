"""Vacation opportunities.

Weekends and public holidays are already days off.  Runs of three or more of
them in a row are *natural breaks*; surfacing those that are not already part
of a planned vacation shows where a few extra days off go furthest.
"""

from __future__ import annotations

import datetime
from collections.abc import Collection, Iterable
from typing import NamedTuple

from loguru import logger

from lifecalendar.categories import (
    PUBLIC_HOLIDAYS,
    CategorySet,
    date_range,
    labeled_categories,
    parse_date,
)
from lifecalendar.synthetic import is_weekend, year_dates
from lifecalendar.usage import count_weekends_and_holidays

MIN_BREAK_DAYS = 3

DateLike = str | datetime.date

# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class PotentialVacation(NamedTuple):
    """A run of non-working days not covered by any planned vacation."""

    start_date: datetime.date
    end_date: datetime.date
    total_days: int
    weekend_days: int
    holidays: int
    description: str


class VacationPlan(NamedTuple):
    """An already-labeled entry with its weekend/holiday make-up."""

    start_date: datetime.date
    end_date: datetime.date
    label: str
    category: str
    total_days: int
    weekend_days: int
    holidays: int


class YearReport(NamedTuple):
    year: int
    existing_vacations: list[VacationPlan]
    potential_vacations: list[PotentialVacation]


# ---------------------------------------------------------------------------
# Finder
# ---------------------------------------------------------------------------


def _as_date(value: DateLike) -> datetime.date:
    if isinstance(value, datetime.date):
        return value
    return parse_date(value)


def _make_potential(
    run: list[datetime.date],
    holidays: Collection[datetime.date],
) -> PotentialVacation:
    n = len(run)
    weekend_days = sum(1 for d in run if is_weekend(d))
    holiday_days = sum(1 for d in run if d in holidays)
    return PotentialVacation(
        start_date=run[0],
        end_date=run[-1],
        total_days=n,
        weekend_days=weekend_days,
        holidays=holiday_days,
        description=(
            f"{n}-day natural break: {weekend_days} weekends, {holiday_days} holidays"
        ),
    )


def find_potential_vacations(
    year: int,
    holidays: Collection[datetime.date],
    existing: Iterable[tuple[DateLike, DateLike]] = (),
) -> list[PotentialVacation]:
    """Find runs of 3+ consecutive non-working days in *year*.

    Parameters
    ----------
    year : int
        Calendar year to scan.
    holidays : collection of date
        Public holidays; together with weekends they form the non-working days.
    existing : iterable of (start, end)
        Already-planned ranges as ``YYYY-MM-DD`` strings (or dates).  Their days
        count as spent and break any run they touch.

    Raises
    ------
    InvalidDate
        If an *existing* date string is malformed.
    """
    non_working: dict[datetime.date, bool] = {
        d: is_weekend(d) or d in holidays for d in year_dates(year)
    }

    for start_raw, end_raw in existing:
        start = _as_date(start_raw)
        end = _as_date(end_raw)
        for d in date_range(start, end):
            if d in non_working:
                non_working[d] = False

    potentials: list[PotentialVacation] = []
    run: list[datetime.date] = []
    for d, off in non_working.items():
        if off:
            run.append(d)
            continue
        if len(run) >= MIN_BREAK_DAYS:
            potentials.append(_make_potential(run, holidays))
        run = []

    # A run still open on Dec 31 is closed by the year end
    if len(run) >= MIN_BREAK_DAYS:
        potentials.append(_make_potential(run, holidays))

    logger.debug("Found {} natural breaks in {}", len(potentials), year)
    return potentials


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


def existing_vacation_plans(category_set: CategorySet) -> list[VacationPlan]:
    """Every labeled entry (outside public holidays) as a :class:`VacationPlan`."""
    holidays = category_set.dates_of(PUBLIC_HOLIDAYS)
    plans: list[VacationPlan] = []
    for labeled in labeled_categories(category_set, exclude=[PUBLIC_HOLIDAYS]):
        for entry in labeled.entries:
            weekend_days, holiday_days = count_weekends_and_holidays(
                entry.start_date, entry.end_date, holidays
            )
            plans.append(
                VacationPlan(
                    start_date=entry.start_date,
                    end_date=entry.end_date,
                    label=entry.label,
                    category=labeled.name,
                    total_days=entry.total_days,
                    weekend_days=weekend_days,
                    holidays=holiday_days,
                )
            )
    return plans


def build_year_report(category_set: CategorySet) -> YearReport:
    """Existing plans and the natural breaks left around them for one year."""
    existing = existing_vacation_plans(category_set)
    potentials = find_potential_vacations(
        category_set.year,
        category_set.dates_of(PUBLIC_HOLIDAYS),
        [(p.start_date, p.end_date) for p in existing],
    )
    return YearReport(
        year=category_set.year,
        existing_vacations=existing,
        potential_vacations=potentials,
    )
