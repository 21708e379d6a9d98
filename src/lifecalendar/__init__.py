"""lifecalendar.

Classify every day of a year by category priority and find the natural
breaks (weekends plus holidays) worth extending into a vacation.
"""

from loguru import logger

from lifecalendar.categories import (
    Category,
    CategoryEntry,
    CategorySet,
    SyntheticKind,
    category_from_entries,
    parse_date,
)
from lifecalendar.classifier import DayInfo, classify_year
from lifecalendar.errors import CalendarError, InvalidDate, InvalidRange
from lifecalendar.opportunities import (
    PotentialVacation,
    VacationPlan,
    build_year_report,
    find_potential_vacations,
)
from lifecalendar.synthetic import synthetic_categories, with_synthetic
from lifecalendar.usage import count_weekends_and_holidays, working_days_used

# The CLI turns this back on; library callers opt in with logger.enable().
logger.disable("lifecalendar")

__all__ = [
    "CalendarError",
    "Category",
    "CategoryEntry",
    "CategorySet",
    "DayInfo",
    "InvalidDate",
    "InvalidRange",
    "PotentialVacation",
    "SyntheticKind",
    "VacationPlan",
    "build_year_report",
    "category_from_entries",
    "classify_year",
    "count_weekends_and_holidays",
    "find_potential_vacations",
    "parse_date",
    "synthetic_categories",
    "with_synthetic",
    "working_days_used",
]
