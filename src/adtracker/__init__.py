# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
AdTracker
---------

Operations dashboard engine for a small digital-marketing team. It records
ad spend/revenue per offer, manual and recurring operating expenses, and
lightweight project/task tracking, then aggregates them into profitability
metrics over configurable date windows.

Main capabilities:
- date-range resolution (today, last 7 days, this month, custom, ...) with
  previous-period comparison,
- day-of-month accrual of recurring expenses,
- dashboard metrics: revenue, spend, extras, net profit, ROAS, ROI,
- daily time series for charting,
- per-offer economics (ROI, break-even ROAS, max CPA),
- CSV loading, TOML configuration and a command-line interface,
- an optional AI-written performance summary.

The engine is pure computation over in-memory records; I/O lives in
``io.py`` and presentation in ``views.py`` / ``cli.py``.

Version: 0.1.0

Usage:
    python -m adtracker.cli --help
"""

__all__ = ["engine", "periods", "series", "offers", "dashboard"]

__version__ = "0.1.0"
