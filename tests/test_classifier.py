from __future__ import annotations

import datetime
from collections.abc import Callable

from loguru import logger

from lifecalendar.categories import Category, CategorySet
from lifecalendar.classifier import (
    DayInfo,
    category_stats,
    classify_day,
    classify_year,
    sorted_stats,
)
from lifecalendar.config import CategoryStyle, Config
from lifecalendar.synthetic import with_synthetic, year_dates


def _d(s: str) -> datetime.date:
    return datetime.date.fromisoformat(s)


def _cat(name: str, *days: str) -> Category:
    return Category(name=name, kind=name, dates=frozenset(_d(s) for s in days))


def _set(*categories: Category, year: int = 2024) -> CategorySet:
    return CategorySet(year=year, categories={c.name: c for c in categories})


def _priorities(table: dict[str, int]) -> Callable[[str], int]:
    return lambda name: table.get(name, 999)


class TestClassifyYear:
    def test_lowest_priority_wins(self) -> None:
        cs = _set(_cat("a", "2024-06-03"), _cat("b", "2024-06-03", "2024-06-04"))
        result = classify_year(cs, _priorities({"a": 1, "b": 2}))
        assert result[_d("2024-06-03")] == DayInfo("a", 1)
        assert result[_d("2024-06-04")] == DayInfo("b", 2)

    def test_uncategorized_days_absent(self) -> None:
        cs = _set(_cat("a", "2024-06-03"))
        result = classify_year(cs, _priorities({"a": 1}))
        assert list(result) == [_d("2024-06-03")]

    def test_tie_goes_to_smallest_name(self) -> None:
        cs = _set(
            _cat("zeta", "2024-06-03"),
            _cat("alpha", "2024-06-03"),
            _cat("mid", "2024-06-03"),
        )
        result = classify_year(cs, _priorities({"zeta": 5, "alpha": 5, "mid": 5}))
        assert result[_d("2024-06-03")] == DayInfo("alpha", 5)

    def test_unknown_category_gets_default_priority(self) -> None:
        config = Config(years=[2024], categories={"vacations": CategoryStyle(priority=1)})
        cs = _set(_cat("hobbies", "2024-06-03"), _cat("vacations", "2024-06-04"))
        result = classify_year(cs, config.priority_for)
        assert result[_d("2024-06-03")] == DayInfo("hobbies", 999)
        assert result[_d("2024-06-04")] == DayInfo("vacations", 1)

    def test_days_outside_year_ignored(self) -> None:
        cs = _set(_cat("a", "2023-12-31", "2024-01-01", "2025-01-01"))
        result = classify_year(cs, _priorities({}))
        assert list(result) == [_d("2024-01-01")]

    def test_empty_set(self) -> None:
        assert classify_year(_set(), _priorities({})) == {}

    def test_priority_looked_up_once_per_category(self) -> None:
        calls: list[str] = []

        def priority(name: str) -> int:
            calls.append(name)
            return 1

        cs = _set(_cat("a", "2024-06-03", "2024-06-04"), _cat("b", "2024-06-04"))
        classify_year(cs, priority)
        assert sorted(calls) == ["a", "b"]

    def test_library_logging_silent_by_default(self) -> None:
        messages: list[str] = []
        sink_id = logger.add(messages.append, level="DEBUG")
        try:
            classify_year(_set(_cat("a", "2024-06-03")), _priorities({}))
        finally:
            logger.remove(sink_id)
        assert messages == []


class TestClassifyDay:
    def test_no_category(self) -> None:
        cs = _set(_cat("a", "2024-06-03"))
        assert classify_day(_d("2024-06-04"), cs, _priorities({})) is None

    def test_tie_goes_to_smallest_name(self) -> None:
        cs = _set(_cat("b", "2024-06-03"), _cat("a", "2024-06-03"), _cat("c", "2024-06-03"))
        priority = _priorities({"a": 2, "b": 2, "c": 1})
        assert classify_day(_d("2024-06-03"), cs, priority) == DayInfo("c", 1)
        assert classify_day(_d("2024-06-03"), cs, _priorities({})) == DayInfo("a", 999)

    def test_matches_per_day_resolution_over_full_year(self) -> None:
        cs = with_synthetic(
            _set(
                _cat("vacations", "2024-07-01", "2024-07-02", "2024-07-06"),
                _cat("public_holidays", "2024-07-04", "2024-07-06"),
            ),
            today=_d("2024-07-02"),
        )
        priority = _priorities(
            {
                "current_day": 0,
                "public_holidays": 1,
                "vacations": 2,
                "weekends": 3,
                "odd_week": 50,
                "even_week": 50,
            }
        )
        result = classify_year(cs, priority)

        for day in year_dates(2024):
            containing = [n for n in cs.names() if day in cs.dates_of(n)]
            assert (day in result) == bool(containing)
            info = result[day]
            assert priority(info.category) == info.priority
            assert all(priority(n) >= info.priority for n in containing)
            assert classify_day(day, cs, priority) == info

        assert result[_d("2024-07-02")].category == "current_day"
        assert result[_d("2024-07-06")].category == "public_holidays"
        assert result[_d("2024-07-01")].category == "vacations"
        assert result[_d("2024-07-07")].category == "weekends"
        # plain weekdays fall to week parity: 2024-07-03 is ISO week 27, 07-10 week 28
        assert result[_d("2024-07-03")] == DayInfo("odd_week", 50)
        assert result[_d("2024-07-10")] == DayInfo("even_week", 50)


class TestStats:
    def test_category_stats(self) -> None:
        infos = {
            _d("2024-06-03"): DayInfo("a", 1),
            _d("2024-06-04"): DayInfo("a", 1),
            _d("2024-06-05"): DayInfo("b", 2),
        }
        assert category_stats(infos) == {"a": 2, "b": 1}

    def test_sorted_stats_by_priority_then_name(self) -> None:
        stats = {"weekends": 104, "vacations": 10, "holidays": 3, "empty": 0}
        rows = sorted_stats(stats, _priorities({"vacations": 1, "holidays": 1, "weekends": 2}))
        assert [r.name for r in rows] == ["holidays", "vacations", "weekends"]
        assert rows[0].days == 3
