# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Core metrics aggregation engine for AdTracker.

This module turns raw records into the profitability numbers shown on the
dashboard for one period and one offer scope.

1. Inputs
   ------
   - ad entries (spend / revenue per offer and day),
   - manual extra expenses,
   - recurring expense definitions,
   - a resolved Period (see periods.py),
   - an offer scope ('all' or one offer id).

2. Pipeline
   --------
   - select the ad entries and manual expenses of the period
     (filters.py),
   - accrue recurring expenses day by day (recurring.py),
   - sum revenue, spend and extras,
   - derive net profit, ROAS and ROI.

3. Scope rules
   -----------
   Manual and recurring expenses are shared operating costs. They are only
   included for the 'all' scope; single-offer views show ad economics only.

4. Zero safety
   -----------
   Empty inputs yield the all-zero metrics object. Ratios whose denominator
   is zero are reported as 0.0, never as NaN or infinity.

The engine performs no I/O and never mutates its inputs; every function is
a pure function of its arguments.
"""

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Optional

from .filters import filter_ads, filter_expenses, is_all_offers
from .models import ALL_OFFERS, AdEntry, ExtraExpense, RecurringExpense
from .periods import Period
from .recurring import accrue_recurring

# Metric keys with their display label and unit, in dashboard order.
METRIC_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("total_revenue", "Revenue", "amount"),
    ("total_spend", "Ad spend", "amount"),
    ("total_extras", "Extra expenses", "amount"),
    ("net_profit", "Net profit", "amount"),
    ("roas", "ROAS", "ratio"),
    ("roi", "ROI", "percent"),
)


@dataclass(frozen=True)
class DashboardMetrics:
    """
    Derived profitability metrics for one period and offer scope.

    Attributes:
        total_revenue: Sum of ad revenue.
        total_spend: Sum of ad spend.
        total_extras: Manual plus recurring expenses (0 under an offer scope).
        net_profit: revenue - spend - extras.
        roas: revenue / spend, 0.0 when spend is 0.
        roi: (revenue - investment) / investment * 100 where
            investment = spend + extras, 0.0 when investment is 0.
    """

    total_revenue: float = 0.0
    total_spend: float = 0.0
    total_extras: float = 0.0
    net_profit: float = 0.0
    roas: float = 0.0
    roi: float = 0.0

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is not positive."""
    if denominator > 0:
        return numerator / denominator
    return 0.0


def build_metrics(
    total_revenue: float,
    total_spend: float,
    total_extras: float,
) -> DashboardMetrics:
    """Derive net profit, ROAS and ROI from the three base totals."""
    total_investment = total_spend + total_extras
    return DashboardMetrics(
        total_revenue=total_revenue,
        total_spend=total_spend,
        total_extras=total_extras,
        net_profit=total_revenue - total_spend - total_extras,
        roas=safe_ratio(total_revenue, total_spend),
        roi=safe_ratio(total_revenue - total_investment, total_investment) * 100,
    )


def compute_metrics(
    ads: Iterable[AdEntry],
    expenses: Iterable[ExtraExpense],
    recurring: Iterable[RecurringExpense],
    period: Period,
    offer_scope: str = ALL_OFFERS,
) -> DashboardMetrics:
    """
    Compute the dashboard metrics for a period and offer scope.

    Args:
        ads: All ad entries (filtered here by period and scope).
        expenses: All manual expenses (filtered here by period).
        recurring: Recurring expense definitions.
        period: Resolved inclusive period.
        offer_scope: 'all' or a single offer id.

    Returns:
        A DashboardMetrics instance. Never raises for empty inputs.
    """
    relevant_ads = filter_ads(ads, period, offer_scope)

    total_revenue = sum((ad.revenue for ad in relevant_ads), 0.0)
    total_spend = sum((ad.spend for ad in relevant_ads), 0.0)

    manual_extras = 0.0
    if is_all_offers(offer_scope):
        manual_extras = sum(
            (e.amount for e in filter_expenses(expenses, period, offer_scope)), 0.0
        )

    recurring_total = accrue_recurring(recurring, period, offer_scope)

    return build_metrics(
        total_revenue=total_revenue,
        total_spend=total_spend,
        total_extras=manual_extras + recurring_total,
    )


def compute_growth(current: float, previous: float) -> float:
    """
    Percentage change from ``previous`` to ``current``.

    When ``previous`` is 0 there is no meaningful base: the change is
    reported as 100.0 if ``current`` is positive and 0.0 otherwise.
    The base keeps its sign, so a shrinking loss (-100 to -50) reads as
    -50%, matching the dashboard cards.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def compare_metrics(
    current: DashboardMetrics,
    previous: DashboardMetrics,
    keys: Optional[Iterable[str]] = None,
) -> dict[str, float]:
    """Return ``{metric_key -> growth %}`` between two metrics objects."""
    selected = list(keys) if keys is not None else [k for k, _, _ in METRIC_FIELDS]
    current_values: Mapping[str, float] = current.as_dict()
    previous_values: Mapping[str, float] = previous.as_dict()

    growth: dict[str, float] = {}
    for key in selected:
        if key not in current_values:
            raise ValueError(f"Unknown metric key: {key!r}")
        growth[key] = compute_growth(current_values[key], previous_values[key])
    return growth
