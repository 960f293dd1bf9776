# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Period-over-period orchestration for the dashboard.

``compute_dashboard()`` is the single entry point a presentation layer needs
to render the dashboard for a selected date range and offer scope. In one
call it:

1. resolves the current period (offset 0) and the previous period of the
   same duration (offset 1),
2. computes DashboardMetrics for both periods,
3. computes the growth of every metric between the two,
4. builds the daily series of the current period for charting.

The presentation layer owns the selection state (range, custom bounds,
offer) and calls this function on demand; nothing here is cached or
recomputed implicitly.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

import pandas as pd

from .engine import DashboardMetrics, compare_metrics, compute_metrics
from .models import ALL_OFFERS, Dataset
from .periods import DEFAULT_EPOCH_FLOOR, Period, resolve_period
from .series import build_daily_series


@dataclass(frozen=True)
class DashboardSnapshot:
    """
    Everything the dashboard shows for one selection.

    Attributes
    ----------
    selector :
        Date-range selector used (e.g. 'last7days').
    offer_scope :
        'all' or a single offer id.
    period / previous_period :
        Resolved current and previous periods.
    metrics / previous_metrics :
        Metrics for each period.
    growth :
        Mapping metric key -> percentage change from previous to current.
    series :
        Daily series of the current period (see series.py).
    """

    selector: str
    offer_scope: str
    period: Period
    previous_period: Period
    metrics: DashboardMetrics
    previous_metrics: DashboardMetrics
    growth: dict[str, float]
    series: pd.DataFrame


def compute_dashboard(
    dataset: Dataset,
    selector: str,
    reference_today: date,
    offer_scope: str = ALL_OFFERS,
    custom_bounds: Optional[tuple[date, date]] = None,
    *,
    epoch_floor: date = DEFAULT_EPOCH_FLOOR,
    this_month_previous: str = "rolling_30_days",
) -> DashboardSnapshot:
    """
    Compute current and previous metrics, growth and the daily series.

    Raises
    ------
    ValueError
        If the selector is unknown or 'custom' is requested without bounds.
    """
    periods: list[Period] = [
        resolve_period(
            selector,
            reference_today,
            offset,
            custom_bounds,
            epoch_floor=epoch_floor,
            this_month_previous=this_month_previous,
        )
        for offset in (0, 1)
    ]
    current_period, previous_period = periods

    current, previous = (
        compute_metrics(
            dataset.ads,
            dataset.expenses,
            dataset.recurring,
            period,
            offer_scope,
        )
        for period in periods
    )

    series = build_daily_series(
        dataset.ads,
        dataset.expenses,
        dataset.recurring,
        current_period,
        offer_scope,
    )

    return DashboardSnapshot(
        selector=selector,
        offer_scope=str(offer_scope),
        period=current_period,
        previous_period=previous_period,
        metrics=current,
        previous_metrics=previous,
        growth=compare_metrics(current, previous),
        series=series,
    )
