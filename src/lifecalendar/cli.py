"""Typer CLI for lifecalendar."""

from __future__ import annotations

import datetime
import json
import sys

import typer
from loguru import logger

from lifecalendar.categories import CategorySet, labeled_categories
from lifecalendar.classifier import category_stats, classify_year, sorted_stats
from lifecalendar.config import DEFAULT_CONFIG_PATH, Config, load_config
from lifecalendar.errors import CalendarError
from lifecalendar.formatting import (
    assign_markers,
    format_labeled_categories,
    format_legend,
    format_statistics,
    format_year_view,
    visible_categories,
)
from lifecalendar.opportunities import PotentialVacation, VacationPlan, build_year_report
from lifecalendar.storage import CSVStorage
from lifecalendar.synthetic import with_synthetic
from lifecalendar.usage import usage_summary

app = typer.Typer(
    name="lifecalendar",
    help="Year calendar of vacations, holidays and plans, with the natural "
    "breaks worth extending into a real vacation.",
    add_completion=False,
)

CONFIG_OPTION = typer.Option(
    DEFAULT_CONFIG_PATH,
    "--config",
    "-c",
    help="Path to the TOML config file.",
)
YEAR_OPTION = typer.Option(
    None,
    "--year",
    "-y",
    help="Year to process (repeatable). Overrides the configured years.",
)


def _echo_sink(message: str) -> None:
    typer.echo(message, err=True, nl=False)


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.enable("lifecalendar")
    logger.add(
        _echo_sink,
        level="DEBUG" if verbose else "WARNING",
        format="{level}: {message}",
    )


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Render life calendars and find natural vacation breaks."""
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


def _load_config(path: str) -> Config:
    try:
        return load_config(path)
    except CalendarError as exc:
        raise _fail(exc) from None


def _resolve_years(config: Config, years: list[int] | None) -> list[int]:
    return list(years) if years else list(config.years)


def _load_year(storage: CSVStorage, year: int) -> CategorySet:
    try:
        return storage.load_year(year)
    except CalendarError as exc:
        raise _fail(exc) from None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def show(
    config: str = CONFIG_OPTION,
    year: list[int] | None = YEAR_OPTION,
) -> None:
    """Print the year view, legend, plans and statistics."""
    cfg = _load_config(config)
    storage = CSVStorage(cfg.resolve_data_folder())
    today = datetime.date.today()

    for y in _resolve_years(cfg, year):
        base = _load_year(storage, y)
        augmented = with_synthetic(base, today=today)
        day_infos = classify_year(augmented, cfg.priority_for)
        markers = assign_markers(visible_categories(augmented, cfg))

        typer.echo(format_year_view(augmented, day_infos, markers))
        legend = format_legend(markers)
        if legend:
            typer.echo(legend)
        labeled = labeled_categories(base)
        if labeled:
            typer.echo(format_labeled_categories(labeled))
        stats = sorted_stats(category_stats(day_infos), cfg.priority_for)
        typer.echo(format_statistics(stats, usage_summary(base)))
        typer.echo()


def _serialize_existing(plan: VacationPlan) -> dict[str, object]:
    return {
        "date_start": plan.start_date.isoformat(),
        "date_end": plan.end_date.isoformat(),
        "label": plan.label,
        "category": plan.category,
        "total_days": plan.total_days,
        "weekend_count": plan.weekend_days,
        "holiday_count": plan.holidays,
    }


def _serialize_potential(potential: PotentialVacation) -> dict[str, object]:
    return {
        "date_start": potential.start_date.isoformat(),
        "date_end": potential.end_date.isoformat(),
        "total_days": potential.total_days,
        "weekend_count": potential.weekend_days,
        "holiday_count": potential.holidays,
        "description": potential.description,
    }


@app.command()
def plan(
    config: str = CONFIG_OPTION,
    year: list[int] | None = YEAR_OPTION,
) -> None:
    """Output existing and potential vacations as JSON."""
    cfg = _load_config(config)
    storage = CSVStorage(cfg.resolve_data_folder())

    output: list[dict[str, object]] = []
    for y in _resolve_years(cfg, year):
        base = _load_year(storage, y)
        try:
            report = build_year_report(base)
        except CalendarError as exc:
            raise _fail(exc) from None
        output.append(
            {
                "year": report.year,
                "existing_vacations": [_serialize_existing(p) for p in report.existing_vacations],
                "potential_vacations": [
                    _serialize_potential(p) for p in report.potential_vacations
                ],
            }
        )

    json.dump(output, sys.stdout, indent=2)
    typer.echo()


@app.command()
def usage(
    config: str = CONFIG_OPTION,
    year: list[int] | None = YEAR_OPTION,
) -> None:
    """Print working days used by vacations and personal days."""
    cfg = _load_config(config)
    storage = CSVStorage(cfg.resolve_data_folder())

    for y in _resolve_years(cfg, year):
        summary = usage_summary(_load_year(storage, y))
        typer.echo(
            f"  {summary.year}: {summary.vacation_days} vacation days, "
            f"{summary.personal_days} personal days used"
        )


def main() -> None:
    """Entry point for the CLI."""
    app()
