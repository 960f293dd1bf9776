# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Configuration helpers for AdTracker.

This module is responsible for:
- loading the application configuration from a TOML file,
- validating dashboard defaults (date range, offer scope, period policies),
- exposing typed dataclasses used by the rest of the application.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Optional

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for older Python
    import tomli as tomllib  # type: ignore[import]

from .models import ALL_OFFERS
from .periods import DATE_RANGE_TYPES, DEFAULT_EPOCH_FLOOR, THIS_MONTH_POLICIES

DEFAULT_CONFIG_FILENAME = "adtracker_config.toml"

DISPLAY_MODES: tuple[str, ...] = ("table", "csv", "both")


@dataclass(frozen=True)
class DataPaths:
    """Locations of the CSV exports the records are read from."""

    offers: Path
    ads: Path
    expenses: Path
    recurring: Path
    projects: Optional[Path] = None
    tasks: Optional[Path] = None


@dataclass(frozen=True)
class DashboardConfig:
    """Dashboard defaults and period policies."""

    default_range: str = "last7days"
    default_offer: str = ALL_OFFERS
    epoch_floor: date = DEFAULT_EPOCH_FLOOR
    this_month_previous: str = "rolling_30_days"
    currency: str = "BRL"


@dataclass(frozen=True)
class AIConfig:
    """Options for the AI performance summary."""

    enabled: bool = False
    model: str = "gpt-4o-mini"
    sample_size: int = 10


@dataclass(frozen=True)
class AppConfig:
    """
    Application-wide configuration for AdTracker.

    This aggregates:
    - the data file locations,
    - dashboard defaults (date range, offer scope, epoch floor, currency),
    - display options for tables and CSV exports,
    - AI summary options.
    """

    data: DataPaths
    dashboard: DashboardConfig
    display_mode: str
    decimals: int
    ai: AIConfig


def _load_toml(path: Path) -> dict[str, Any]:
    """
    Load a TOML file and return its content as a dictionary.

    Raises:
        FileNotFoundError: if the file does not exist.
        ValueError: if the TOML content cannot be parsed or is not a table.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Failed to parse TOML config file: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Invalid TOML root type in {path}, expected a table.")

    return data


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, Mapping):
        return {}
    return section


def _parse_data_paths(data_section: Mapping[str, Any], base_dir: Path) -> DataPaths:
    def _resolve(key: str, default: Optional[str]) -> Optional[Path]:
        raw = data_section.get(key, default)
        if not raw:
            return None
        return (base_dir / str(raw)).resolve()

    return DataPaths(
        offers=_resolve("offers", "data/offers.csv"),
        ads=_resolve("ads", "data/ads.csv"),
        expenses=_resolve("expenses", "data/expenses.csv"),
        recurring=_resolve("recurring", "data/recurring.csv"),
        projects=_resolve("projects", None),
        tasks=_resolve("tasks", None),
    )


def _parse_dashboard(section: Mapping[str, Any]) -> DashboardConfig:
    """
    Extract and validate the [dashboard] section.

    Raises:
        ValueError: on an unknown range/policy or a malformed epoch floor.
    """
    default_range = str(section.get("default_range", "last7days"))
    if default_range not in DATE_RANGE_TYPES or default_range == "custom":
        raise ValueError(
            f"Invalid dashboard.default_range {default_range!r} in the configuration."
        )

    policy = str(section.get("this_month_previous", "rolling_30_days"))
    if policy not in THIS_MONTH_POLICIES:
        raise ValueError(
            f"Invalid dashboard.this_month_previous {policy!r}. "
            f"Expected one of: {', '.join(THIS_MONTH_POLICIES)}."
        )

    raw_floor = section.get("epoch_floor")
    if raw_floor is None:
        epoch_floor = DEFAULT_EPOCH_FLOOR
    else:
        try:
            epoch_floor = date.fromisoformat(str(raw_floor))
        except ValueError as exc:
            raise ValueError(
                "Invalid dashboard.epoch_floor, expected YYYY-MM-DD format."
            ) from exc

    return DashboardConfig(
        default_range=default_range,
        default_offer=str(section.get("default_offer") or ALL_OFFERS),
        epoch_floor=epoch_floor,
        this_month_previous=policy,
        currency=str(section.get("currency") or "BRL"),
    )


def _parse_ai(section: Mapping[str, Any]) -> AIConfig:
    try:
        sample_size = int(section.get("sample_size", 10))
    except (TypeError, ValueError) as exc:
        raise ValueError(
            "Invalid value for 'ai.sample_size' in the configuration. "
            "Expected an integer."
        ) from exc

    if sample_size < 0:
        raise ValueError("'ai.sample_size' cannot be negative.")

    return AIConfig(
        enabled=bool(section.get("enabled", False)),
        model=str(section.get("model") or "gpt-4o-mini"),
        sample_size=sample_size,
    )


def default_app_config(base_dir: Optional[Path] = None) -> AppConfig:
    """Configuration used when no TOML file is available."""
    root = (base_dir or Path.cwd()).resolve()
    return AppConfig(
        data=_parse_data_paths({}, root),
        dashboard=DashboardConfig(),
        display_mode="table",
        decimals=2,
        ai=AIConfig(),
    )


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the AdTracker application configuration from a TOML file.

    Expected sections in the TOML file
    ----------------------------------
    [data]
        Paths to the offers / ads / expenses / recurring CSV exports, plus
        optional projects / tasks exports.

    [dashboard]
        default_range, default_offer, epoch_floor, this_month_previous,
        currency.

    [display]
        mode (table | csv | both) and decimals.

    [ai]
        enabled, model, sample_size.

    All file paths in the TOML are resolved relative to the directory of
    the TOML file itself.

    Parameters
    ----------
    config_path :
        Path to the TOML configuration file. Defaults to
        ``adtracker_config.toml`` in the current directory.

    Returns
    -------
    AppConfig
        Parsed and validated application configuration.
    """
    if config_path is None:
        config_file = Path(DEFAULT_CONFIG_FILENAME).resolve()
    else:
        config_file = Path(config_path).resolve()

    raw = _load_toml(config_file)
    base_dir = config_file.parent

    # 1) Data files
    data_paths = _parse_data_paths(_section(raw, "data"), base_dir)

    # 2) Dashboard defaults
    dashboard = _parse_dashboard(_section(raw, "dashboard"))

    # 3) Display options
    display_section = _section(raw, "display")
    display_mode = str(display_section.get("mode", "table"))
    if display_mode not in DISPLAY_MODES:
        raise ValueError(
            f"Invalid display.mode {display_mode!r}. "
            f"Expected one of: {', '.join(DISPLAY_MODES)}."
        )
    try:
        decimals = int(display_section.get("decimals", 2))
    except (TypeError, ValueError):
        decimals = 2

    # 4) AI summary
    ai = _parse_ai(_section(raw, "ai"))

    return AppConfig(
        data=data_paths,
        dashboard=dashboard,
        display_mode=display_mode,
        decimals=decimals,
        ai=ai,
    )
