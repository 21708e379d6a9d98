"""CSV storage for per-year categories.

Layout::

    <data_folder>/<year>/<category>.csv

Each file is one category named after its stem.  The header row selects the
columns (case-insensitive): ``date_start``, ``date_end``, ``date``, ``label``
and ``desc``.
"""

from __future__ import annotations

import csv
import datetime
import pathlib

from loguru import logger

from lifecalendar.categories import (
    PLACEHOLDER_LABEL,
    Category,
    CategoryEntry,
    CategorySet,
    category_from_entries,
    make_entry,
    parse_date,
)
from lifecalendar.errors import DataNotFound, InvalidDate, InvalidRange

DATE_START_COL = "date_start"
DATE_END_COL = "date_end"
DATE_COL = "date"
LABEL_COL = "label"
DESC_COL = "desc"


def _header_map(headers: list[str]) -> dict[str, int]:
    return {h.strip().lower(): i for i, h in enumerate(headers)}


def _field(record: list[str], headers: dict[str, int], name: str) -> str:
    idx = headers.get(name)
    if idx is None or idx >= len(record):
        return ""
    return record[idx].strip()


def _date_field(record: list[str], headers: dict[str, int], name: str) -> datetime.date | None:
    value = _field(record, headers, name)
    return parse_date(value) if value else None


def parse_record(record: list[str], headers: dict[str, int]) -> CategoryEntry:
    """Turn one CSV row into a validated entry.

    A row with ``date_start`` and no ``date_end`` (or with a single ``date``)
    covers one day.  The label falls back to ``desc``, then to ``Event``.
    """
    start = _date_field(record, headers, DATE_START_COL)
    end = _date_field(record, headers, DATE_END_COL)

    if end is None:
        single = _date_field(record, headers, DATE_COL)
        if single is not None:
            start = end = single
        elif start is not None:
            end = start

    label = _field(record, headers, LABEL_COL) or _field(record, headers, DESC_COL)
    return make_entry(start, end, label or PLACEHOLDER_LABEL)


def load_category_file(path: pathlib.Path, name: str | None = None) -> Category:
    """Load one CSV file as a category named after the file stem."""
    category_name = name or path.stem
    with path.open(newline="", encoding="utf-8") as f:
        records = list(csv.reader(f))

    entries: list[CategoryEntry] = []
    if records and records[0]:
        headers = _header_map(records[0])
        for line_no, record in enumerate(records[1:], start=2):
            if not record or not record[0].strip():
                continue
            try:
                entries.append(parse_record(record, headers))
            except InvalidDate as exc:
                raise InvalidDate(exc.value, source=f"{path}:{line_no}") from exc
            except InvalidRange as exc:
                raise InvalidRange(f"{path}:{line_no}: {exc}") from exc

    logger.debug("Loaded {} entries for {!r} from {}", len(entries), category_name, path)
    return category_from_entries(category_name, entries)


class CSVStorage:
    """Reads categories from ``<data_folder>/<year>/*.csv``."""

    def __init__(self, data_folder: str | pathlib.Path):
        self.data_folder = pathlib.Path(data_folder)

    def year_dir(self, year: int) -> pathlib.Path:
        return self.data_folder / str(year)

    def year_exists(self, year: int) -> bool:
        return self.year_dir(year).is_dir()

    def _category_files(self, year: int) -> dict[str, pathlib.Path]:
        directory = self.year_dir(year)
        if not directory.is_dir():
            raise DataNotFound(year, directory)
        return {
            p.stem: p
            for p in sorted(directory.iterdir())
            if p.is_file() and p.suffix == ".csv"
        }

    def category_names(self, year: int) -> list[str]:
        return sorted(self._category_files(year))

    def load_year(self, year: int) -> CategorySet:
        """Load every category file of *year*.

        Raises :class:`DataNotFound` when the year has no directory.
        """
        categories: dict[str, Category] = {}
        for name, path in self._category_files(year).items():
            categories[name] = load_category_file(path, name)
        logger.debug("Loaded {} categories for {}", len(categories), year)
        return CategorySet(year=year, categories=categories)
