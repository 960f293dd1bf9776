# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Command-Line Interface (CLI) for AdTracker.

This module wires together the main building blocks of AdTracker:

- configuration (data files, dashboard defaults, display options),
- CSV loading of offers, ad entries, expenses and recurring expenses,
- period resolution and the metrics engine,
- daily series, offer economics and the optional AI summary,
- view helpers (tabular rendering and CSV export).

The CLI is intentionally thin: it does not implement any financial logic.


High-level pipeline
-------------------

1) Load the TOML configuration (``adtracker_config.toml`` by default, or
   ``--config PATH``). Without a configuration file, defaults are used and
   data files are looked up under ``data/``.

2) Load the four record collections from CSV.

3) Resolve the selected date range (``--range``, or ``--from-date`` /
   ``--to-date`` for a custom period) against the reference day
   (``--today``, defaults to the current date), together with the previous
   period of the same duration.

4) Compute metrics for both periods, the daily series and offer statistics.

5) Render tables and/or CSV files depending on the display mode.


Scopes: what to render
----------------------

- ``metrics`` (default): dashboard metrics with previous-period growth.
- ``series``: one row per day of the period (revenue, spend, extras, profit).
- ``offers``: all-time offer economics and the period breakdown per offer.
- ``all``: everything above.


Examples
--------

    python -m adtracker.cli --range last7days
    python -m adtracker.cli --range thisMonth --offer o1 --scope all
    python -m adtracker.cli --from-date 2024-05-01 --to-date 2024-05-15 \\
        --scope series --display-mode both --output reports
    python -m adtracker.cli --range last30days --summary
    python -m adtracker.cli projects
"""

import argparse
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import pandas as pd

from . import __version__
from .config import (
    DEFAULT_CONFIG_FILENAME,
    DISPLAY_MODES,
    AppConfig,
    default_app_config,
    load_app_config,
)
from .dashboard import compute_dashboard
from .io import load_dataset, load_projects
from .models import ALL_OFFERS
from .offers import compute_offer_stats, offer_breakdown
from .periods import DATE_RANGE_TYPES
from .projects import project_progress
from .summary import SummaryError, build_summary_request, generate_summary
from .views import (
    format_amount,
    metrics_to_dataframe,
    offer_stats_to_dataframe,
    round_frame,
)


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the CLI."""
    ap = argparse.ArgumentParser(
        prog="python -m adtracker.cli",
        description=(
            "AdTracker - profitability dashboard for digital-marketing teams. "
            "Reads ad spend/revenue, extra and recurring expenses and computes "
            "revenue, spend, net profit, ROAS and ROI over a date range."
        ),
    )

    ap.add_argument(
        "--version",
        action="store_true",
        help="Show the installed version of adtracker and exit.",
    )
    ap.add_argument(
        "--config",
        dest="config_path",
        help=(
            "Path to the TOML configuration file. If omitted, "
            f"'{DEFAULT_CONFIG_FILENAME}' in the current directory is used "
            "when present."
        ),
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Show warnings and debug messages from the data loaders.",
    )

    # Period selection
    ap.add_argument(
        "--range",
        dest="date_range",
        choices=list(DATE_RANGE_TYPES),
        help=(
            "Date range to analyse. Defaults to dashboard.default_range from "
            "the configuration. 'custom' requires --from-date and --to-date."
        ),
    )
    ap.add_argument(
        "--from-date",
        dest="from_date",
        help="Custom period start date (YYYY-MM-DD). Implies --range custom.",
    )
    ap.add_argument(
        "--to-date",
        dest="to_date",
        help="Custom period end date (YYYY-MM-DD). Implies --range custom.",
    )
    ap.add_argument(
        "--today",
        dest="today",
        help="Reference day (YYYY-MM-DD) used instead of the current date.",
    )

    ap.add_argument(
        "--offer",
        dest="offer",
        help=(
            "Restrict the dashboard to one offer id ('all' for every offer). "
            "Extra and recurring expenses are excluded for a single offer."
        ),
    )

    ap.add_argument(
        "--scope",
        choices=["metrics", "series", "offers", "all"],
        default="metrics",
        help=(
            "Select what to render: 'metrics' = dashboard metrics; "
            "'series' = daily series; 'offers' = offer economics; "
            "'all' = everything."
        ),
    )

    # Display options
    ap.add_argument(
        "--display-mode",
        dest="display_mode",
        choices=list(DISPLAY_MODES),
        help=(
            "Override the display.mode setting from the configuration file. "
            "'table' prints results to stdout, 'csv' writes CSV files only, "
            "'both' does both."
        ),
    )
    ap.add_argument(
        "--output",
        dest="output_dir",
        help=(
            "Output directory for CSV files when the display mode includes "
            "'csv'. If omitted, 'data/output' is used."
        ),
    )

    ap.add_argument(
        "--summary",
        action="store_true",
        help="Request an AI summary of the metrics (requires OPENAI_API_KEY).",
    )

    subparsers = ap.add_subparsers(
        dest="command",
        metavar="command",
        help="Optional subcommands (e.g. 'projects').",
    )
    subparsers.add_parser(
        "projects",
        help="Show project progress from the projects/tasks exports.",
    )

    return ap


def _parse_optional_date(value: Optional[str]) -> Optional[date]:
    """
    Parse an optional YYYY-MM-DD string into a date.

    Raises:
        ValueError: if the string is not a valid ISO date.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD.") from exc


def _load_config(args: argparse.Namespace) -> AppConfig:
    if args.config_path:
        return load_app_config(args.config_path)
    if Path(DEFAULT_CONFIG_FILENAME).is_file():
        return load_app_config()
    return default_app_config()


def _resolve_selection(
    args: argparse.Namespace,
    config: AppConfig,
) -> tuple[str, Optional[tuple[date, date]]]:
    """Return (selector, custom_bounds) from CLI arguments and config."""
    from_date = _parse_optional_date(args.from_date)
    to_date = _parse_optional_date(args.to_date)

    if from_date or to_date or args.date_range == "custom":
        if from_date is None or to_date is None:
            raise ValueError(
                "A custom period requires both --from-date and --to-date."
            )
        return "custom", (from_date, to_date)

    return args.date_range or config.dashboard.default_range, None


def _write_csv(df: pd.DataFrame, output_dir: Path, name: str, timestamp: str) -> None:
    path = output_dir / f"{name}_{timestamp}.csv"
    df.to_csv(path, index=False)
    print(f"Wrote {path} ({len(df)} rows)")


def _handle_projects_command(config: AppConfig, display_mode: str, output_dir: Path) -> None:
    projects, tasks = load_projects(config.data)
    if not projects:
        print("No projects found.")
        return

    df = project_progress(projects, tasks)

    if display_mode in {"table", "both"}:
        print()
        print("=== Projects ===")
        print(df.to_string(index=False))

    if display_mode in {"csv", "both"}:
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
        _write_csv(df, output_dir, "projects", timestamp)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the AdTracker CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # --version: short-circuit and exit early.
    if args.version:
        print(f"adtracker version {__version__}")
        return

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # 1) Configuration
    try:
        config = _load_config(args)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    display_mode = args.display_mode or config.display_mode
    output_dir = Path(args.output_dir) if args.output_dir else Path("data/output")

    if getattr(args, "command", None) == "projects":
        try:
            _handle_projects_command(config, display_mode, output_dir)
        except ValueError as exc:
            parser.error(str(exc))
        return

    # 2) Selection: range, custom bounds, reference day, offer scope
    try:
        selector, custom_bounds = _resolve_selection(args, config)
        reference_today = _parse_optional_date(args.today) or date.today()
        dataset = load_dataset(config.data)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    offer_scope = args.offer or config.dashboard.default_offer
    offers_by_id = dataset.offer_by_id()
    if offer_scope != ALL_OFFERS and offer_scope not in offers_by_id:
        print(f"Warning: offer {offer_scope!r} does not exist (deleted offer?).")

    # 3) Metrics for the current and previous period
    try:
        snapshot = compute_dashboard(
            dataset,
            selector,
            reference_today,
            offer_scope,
            custom_bounds,
            epoch_floor=config.dashboard.epoch_floor,
            this_month_previous=config.dashboard.this_month_previous,
        )
    except ValueError as exc:
        parser.error(str(exc))

    period = snapshot.period
    if offer_scope == ALL_OFFERS:
        offer_label = "all offers"
    elif offer_scope in offers_by_id:
        offer_label = offers_by_id[offer_scope].name
    else:
        offer_label = f"offer {offer_scope}"
    print(
        f"Applied period: {period.label} "
        f"({period.start.isoformat()} → {period.end.isoformat()}), {offer_label}"
    )
    print(
        f"Compared with: {snapshot.previous_period.start.isoformat()} → "
        f"{snapshot.previous_period.end.isoformat()}"
    )
    print(
        f"Records loaded: {len(dataset.ads)} ad entries, "
        f"{len(dataset.expenses)} expenses, "
        f"{len(dataset.recurring)} recurring expenses, "
        f"{len(dataset.offers)} offers"
    )

    scope = args.scope
    want_metrics = scope in {"metrics", "all"}
    want_series = scope in {"series", "all"}
    want_offers = scope in {"offers", "all"}

    decimals = config.decimals
    metrics_df = metrics_to_dataframe(
        snapshot.metrics, decimals, previous=snapshot.previous_metrics
    )
    series_df = round_frame(snapshot.series, decimals)

    stats_df = None
    breakdown_df = None
    if want_offers:
        stats_df = offer_stats_to_dataframe(
            compute_offer_stats(dataset.offers, dataset.ads), decimals
        )
        breakdown_df = round_frame(
            offer_breakdown(dataset.ads, dataset.offers, period), decimals
        )

    # 4) Render to console (table mode).
    if display_mode in {"table", "both"}:
        if want_metrics:
            print()
            print("=== Dashboard metrics ===")
            print(metrics_df.to_string(index=False))
            print(
                "Net profit: "
                f"{format_amount(snapshot.metrics.net_profit, config.dashboard.currency, decimals)}"
            )

        if want_series:
            print()
            print("=== Daily series ===")
            if series_df.empty:
                print("No days in the selected period.")
            else:
                print(series_df.to_string(index=False))

        if want_offers and stats_df is not None and breakdown_df is not None:
            print()
            print("=== Offers (all time) ===")
            print(stats_df.to_string(index=False))
            print()
            print("=== Offers (selected period) ===")
            if breakdown_df.empty:
                print("No ad entries in the selected period.")
            else:
                print(breakdown_df.to_string(index=False))

    # 5) Render to CSV files (csv mode).
    if display_mode in {"csv", "both"}:
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")

        if want_metrics:
            _write_csv(metrics_df, output_dir, "metrics", timestamp)
        if want_series:
            _write_csv(series_df, output_dir, "daily_series", timestamp)
        if want_offers and stats_df is not None and breakdown_df is not None:
            _write_csv(stats_df, output_dir, "offers", timestamp)
            _write_csv(breakdown_df, output_dir, "offers_period", timestamp)

    # 6) Optional AI summary
    if args.summary or config.ai.enabled:
        request = build_summary_request(
            snapshot.metrics,
            dataset.ads,
            dataset.expenses,
            sample_size=config.ai.sample_size,
            model=config.ai.model,
            currency=config.dashboard.currency,
            period_label=period.label,
        )
        try:
            text = generate_summary(request)
        except SummaryError as exc:
            print(f"Warning: AI summary unavailable: {exc}")
        else:
            print()
            print("=== AI summary ===")
            print(text)


if __name__ == "__main__":
    main()
