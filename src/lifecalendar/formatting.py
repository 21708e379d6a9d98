"""Plain-text output: year view, legend, labeled entries and statistics."""

from __future__ import annotations

import calendar
import datetime
from collections.abc import Iterable, Mapping

from lifecalendar.categories import CategorySet, LabeledCategory
from lifecalendar.classifier import CategoryStat, DayInfo
from lifecalendar.config import Config
from lifecalendar.usage import Usage

W = 64


def assign_markers(names: Iterable[str]) -> dict[str, str]:
    """Give each category a distinct one-character marker.

    The first free letter of the name is used (upper-cased), then digits.
    """
    markers: dict[str, str] = {}
    used: set[str] = set()
    for name in sorted(names):
        candidates = [c.upper() for c in name if c.isalpha()] + list("123456789")
        marker = next((c for c in candidates if c not in used), "?")
        markers[name] = marker
        used.add(marker)
    return markers


def visible_categories(category_set: CategorySet, config: Config) -> list[str]:
    """Non-empty categories that have a style to show."""
    names: list[str] = []
    for category in category_set.ordered():
        if not category.dates:
            continue
        style = config.style_for(category.name)
        if not style.bg and not style.fg:
            continue
        names.append(category.name)
    return names


def format_year_view(
    category_set: CategorySet,
    day_infos: Mapping[datetime.date, DayInfo],
    markers: Mapping[str, str],
) -> str:
    """Return the 12 months of the year, each day tagged with its category marker."""
    year = category_set.year
    lines: list[str] = [
        "=" * W,
        str(year).center(W).rstrip(),
        "=" * W,
        "",
    ]

    cal = calendar.Calendar(firstweekday=0)

    for month in range(1, 13):
        lines.append(f"  {calendar.month_name[month]} {year}")
        lines.append("  Mo  Tu  We  Th  Fr  Sa  Su")

        row = ""
        for day_num, weekday in cal.itermonthdays2(year, month):
            if day_num == 0:
                row += "    "
            else:
                d = datetime.date(year, month, day_num)
                info = day_infos.get(d)
                marker = markers.get(info.category, " ") if info else " "
                row += f" {day_num:>2}{marker}"

            if weekday == 6:
                lines.append(row.rstrip())
                row = ""

        if row.strip():
            lines.append(row.rstrip())
        lines.append("")

    return "\n".join(lines)


def format_legend(markers: Mapping[str, str]) -> str:
    if not markers:
        return ""
    items = sorted(markers.items(), key=lambda kv: kv[0].replace("_", " "))
    parts = [f"{marker}={name.replace('_', ' ')}" for name, marker in items]
    return "  Legend: " + "  ".join(parts)


def format_labeled_categories(labeled: Iterable[LabeledCategory]) -> str:
    lines: list[str] = []
    for category in labeled:
        lines.append("")
        lines.append(f"  {category.display_name}:")
        for entry in category.entries:
            n = entry.total_days
            lines.append(f"    - {entry}  ({n} day{'s' if n != 1 else ''})")
    return "\n".join(lines)


def format_statistics(stats: Iterable[CategoryStat], usage: Usage) -> str:
    lines = ["", "  Statistics:"]
    for stat in stats:
        lines.append(f"    - {stat.name.replace('_', ' ').title()}: {stat.days}")
    lines.append("")
    lines.append(f"  Vacation days used: {usage.vacation_days}")
    lines.append(f"  Personal days used: {usage.personal_days}")
    return "\n".join(lines)
