from __future__ import annotations

import datetime

import pytest

from lifecalendar.categories import Category, CategorySet, SyntheticKind
from lifecalendar.synthetic import (
    current_day,
    days_in_month,
    even_weeks,
    is_leap_year,
    odd_weeks,
    synthetic_categories,
    weekends,
    with_synthetic,
    year_dates,
)

TODAY = datetime.date(2024, 5, 17)


class TestCalendarHelpers:
    @pytest.mark.parametrize(
        ("year", "feb_days"),
        [(2024, 29), (2000, 29), (2023, 28), (1900, 28), (2100, 28), (2400, 29)],
    )
    def test_february_length(self, year: int, feb_days: int) -> None:
        assert days_in_month(year, 2) == feb_days
        feb = [d for d in year_dates(year) if d.month == 2]
        assert len(feb) == feb_days

    def test_is_leap_year(self) -> None:
        assert is_leap_year(2024)
        assert is_leap_year(2000)
        assert not is_leap_year(1900)
        assert not is_leap_year(2023)

    def test_year_dates_span(self) -> None:
        dates = list(year_dates(2024))
        assert dates[0] == datetime.date(2024, 1, 1)
        assert dates[-1] == datetime.date(2024, 12, 31)
        assert len(dates) == 366
        assert dates == sorted(dates)
        assert len(list(year_dates(2023))) == 365


class TestWeekends:
    def test_only_saturdays_and_sundays(self) -> None:
        cat = weekends(2024)
        assert all(d.weekday() in (5, 6) for d in cat.dates)
        assert cat.entries == ()
        assert cat.is_synthetic

    def test_counts(self) -> None:
        # 2024 starts on a Monday and has 366 days; 2023 starts and ends on a Sunday
        assert len(weekends(2024).dates) == 104
        assert len(weekends(2023).dates) == 105

    def test_idempotent(self) -> None:
        assert weekends(2024) == weekends(2024)
        assert odd_weeks(2024) == odd_weeks(2024)
        assert even_weeks(2024) == even_weeks(2024)


class TestWeekParity:
    @pytest.mark.parametrize("year", [2020, 2021, 2024, 2026, 2027])
    def test_every_day_in_exactly_one_parity(self, year: int) -> None:
        odd = odd_weeks(year).dates
        even = even_weeks(year).dates
        assert odd.isdisjoint(even)
        assert odd | even == frozenset(year_dates(year))

    def test_reference_dates(self) -> None:
        odd = odd_weeks(2024).dates
        even = even_weeks(2024).dates
        # 2024-01-01 is ISO week 1
        assert datetime.date(2024, 1, 1) in odd
        # 2024-01-08 is ISO week 2
        assert datetime.date(2024, 1, 8) in even
        # 2024-12-29 is ISO week 52; 2024-12-30 is week 1 of 2025
        assert datetime.date(2024, 12, 29) in even
        assert datetime.date(2024, 12, 30) in odd

    def test_boundary_week_of_previous_iso_year(self) -> None:
        # 2021-01-01..03 belong to ISO week 53 of 2020 (odd), not week 1
        odd = odd_weeks(2021).dates
        assert datetime.date(2021, 1, 1) in odd
        assert datetime.date(2021, 1, 3) in odd
        # 2021-01-04 starts ISO week 1
        assert datetime.date(2021, 1, 4) in odd
        assert datetime.date(2021, 1, 11) in even_weeks(2021).dates


class TestCurrentDay:
    def test_today_in_year(self) -> None:
        cat = current_day(2024, TODAY)
        assert cat is not None
        assert cat.dates == frozenset({TODAY})
        assert cat.kind == SyntheticKind.CURRENT_DAY.value

    def test_today_outside_year(self) -> None:
        assert current_day(2023, TODAY) is None

    def test_omitted_from_synthetic_set(self) -> None:
        names = [c.name for c in synthetic_categories(2023, today=TODAY)]
        assert names == ["weekends", "odd_week", "even_week"]
        names = [c.name for c in synthetic_categories(2024, today=TODAY)]
        assert "current_day" in names


class TestWithSynthetic:
    def test_does_not_mutate_base(self) -> None:
        base = CategorySet(year=2024, categories={})
        augmented = with_synthetic(base, today=TODAY)
        assert dict(base.categories) == {}
        assert set(augmented.names()) == {"weekends", "odd_week", "even_week", "current_day"}

    def test_overwrites_same_name(self) -> None:
        stale = Category(
            name="weekends", kind="plan", dates=frozenset({datetime.date(2024, 1, 3)})
        )
        base = CategorySet(year=2024, categories={"weekends": stale})
        augmented = with_synthetic(base, today=TODAY)
        assert datetime.date(2024, 1, 3) not in augmented.dates_of("weekends")
        assert augmented.dates_of("weekends") == weekends(2024).dates
        assert base.categories["weekends"] is stale
