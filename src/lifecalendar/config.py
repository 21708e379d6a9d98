"""TOML configuration: years to show, data folder and per-category styles.

Example ``config.toml``::

    years = [2024, 2025]
    data_folder = "data"

    [categories.vacations]
    priority = 1
    bg = "#2e7d32"
    fg = "#ffffff"
    bold = true

Categories without a section get :data:`DEFAULT_PRIORITY` and a background
color derived from a hash of their name.
"""

from __future__ import annotations

import colorsys
import datetime
import hashlib
import pathlib
import tomllib
from collections.abc import Mapping
from types import MappingProxyType
from typing import NamedTuple

from loguru import logger

from lifecalendar.errors import ConfigError

DEFAULT_CONFIG_PATH = "config.toml"
DEFAULT_DATA_FOLDER = "data"
DEFAULT_PRIORITY = 999
DEFAULT_FG = "#ffffff"


class CategoryStyle(NamedTuple):
    """Priority and display style of one category."""

    priority: int = DEFAULT_PRIORITY
    fg: str = ""
    bg: str = ""
    bold: bool = False
    italic: bool = False


def derive_color(name: str) -> str:
    """Deterministic ``#rrggbb`` color for *name*.

    The hue comes from the first byte of the MD5 digest (spread by a prime);
    saturation and lightness are fixed for legibility.
    """
    digest = hashlib.md5(name.encode("utf-8")).digest()
    hue = digest[0] * 141 % 360
    r, g, b = colorsys.hls_to_rgb(hue / 360, 0.4, 0.7)
    return f"#{int(r * 255):02x}{int(g * 255):02x}{int(b * 255):02x}"


def default_style(name: str) -> CategoryStyle:
    return CategoryStyle(priority=DEFAULT_PRIORITY, fg=DEFAULT_FG, bg=derive_color(name))


class Config(NamedTuple):
    years: list[int]
    data_folder: str = DEFAULT_DATA_FOLDER
    categories: Mapping[str, CategoryStyle] = MappingProxyType({})

    def style_for(self, name: str) -> CategoryStyle:
        """Configured style for *name*, or the derived default."""
        style = self.categories.get(name)
        if style is None:
            return default_style(name)
        return style

    def priority_for(self, name: str) -> int:
        return self.style_for(name).priority

    def resolve_data_folder(self) -> pathlib.Path:
        """The configured data folder, falling back to ``data`` if it is missing."""
        primary = pathlib.Path(self.data_folder or DEFAULT_DATA_FOLDER)
        if primary.exists():
            return primary
        fallback = pathlib.Path(DEFAULT_DATA_FOLDER)
        if primary != fallback and fallback.exists():
            logger.info("Data folder {} not found, using {}", primary, fallback)
            return fallback
        return primary


def _parse_style(name: str, raw: object) -> CategoryStyle:
    if not isinstance(raw, dict):
        raise ConfigError(f"Category {name!r} must be a table.")
    priority = raw.get("priority", DEFAULT_PRIORITY)
    if not isinstance(priority, int) or isinstance(priority, bool):
        raise ConfigError(f"Category {name!r}: priority must be an integer.")
    return CategoryStyle(
        priority=priority,
        fg=str(raw.get("fg", "")),
        bg=str(raw.get("bg", "")),
        bold=bool(raw.get("bold", False)),
        italic=bool(raw.get("italic", False)),
    )


def parse_config(data: dict[str, object], *, today: datetime.date | None = None) -> Config:
    """Build a :class:`Config` from already-decoded TOML data."""
    default_year = (today or datetime.date.today()).year

    years = data.get("years", [default_year])
    if not isinstance(years, list) or not all(
        isinstance(y, int) and not isinstance(y, bool) for y in years
    ):
        raise ConfigError("'years' must be a list of integers.")

    data_folder = data.get("data_folder", DEFAULT_DATA_FOLDER)
    if not isinstance(data_folder, str):
        raise ConfigError("'data_folder' must be a string.")

    raw_categories = data.get("categories", {})
    if not isinstance(raw_categories, dict):
        raise ConfigError("'categories' must be a table.")

    return Config(
        years=list(years) or [default_year],
        data_folder=data_folder,
        categories={name: _parse_style(name, raw) for name, raw in raw_categories.items()},
    )


def load_config(path: str | pathlib.Path = DEFAULT_CONFIG_PATH) -> Config:
    """Load the TOML config at *path*; a missing file yields the defaults."""
    p = pathlib.Path(path)
    if not p.exists():
        logger.info("Config file {} not found, using defaults", p)
        return parse_config({})

    try:
        with p.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {p}: {exc}") from exc

    return parse_config(data)
