# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Daily time series for charting.

``build_daily_series()`` produces one row per calendar day of a resolved
period, in ascending order, with the same scope rules as the metrics engine:

- ad revenue/spend are distributed into the bucket of their day (filtered by
  offer scope),
- for the 'all' scope, manual expenses are added to their day's extras and
  recurring expenses are accrued per day (day-of-month match against that
  specific day),
- each bucket's profit is computed once all of its amounts are final.

Summing the series over the period gives the same revenue, spend and extras
as ``engine.compute_metrics()`` for the same inputs.

Output schema (long format, one row per day):

    - ``date``       (datetime64[ns], midnight of the calendar day)
    - ``date_label`` (str, "DD/MM" for chart axes)
    - ``revenue``    (float)
    - ``spend``      (float)
    - ``extras``     (float)
    - ``profit``     (float)
"""

from collections.abc import Iterable
from datetime import date

import pandas as pd

from .filters import filter_ads, filter_expenses, is_all_offers
from .models import ALL_OFFERS, AdEntry, ExtraExpense, RecurringExpense
from .periods import Period, iter_days
from .recurring import accrue_recurring_for_day

SERIES_COLUMNS: list[str] = [
    "date",
    "date_label",
    "revenue",
    "spend",
    "extras",
    "profit",
]


def build_daily_series(
    ads: Iterable[AdEntry],
    expenses: Iterable[ExtraExpense],
    recurring: Iterable[RecurringExpense],
    period: Period,
    offer_scope: str = ALL_OFFERS,
) -> pd.DataFrame:
    """
    Build the per-day revenue/spend/extras/profit series for a period.

    Args:
        ads: All ad entries.
        expenses: All manual expenses.
        recurring: Recurring expense definitions.
        period: Resolved inclusive period. A single-day period yields exactly
            one row; the empty period yields an empty DataFrame.
        offer_scope: 'all' or a single offer id.

    Returns:
        A DataFrame with the columns listed in SERIES_COLUMNS, sorted by date.
    """
    # 1) One zeroed bucket per calendar day, so days without activity
    #    still appear in the chart.
    buckets: dict[date, dict[str, float]] = {
        day: {"revenue": 0.0, "spend": 0.0, "extras": 0.0}
        for day in iter_days(period)
    }

    if not buckets:
        return pd.DataFrame(columns=SERIES_COLUMNS)

    # 2) Ad economics, restricted to the offer scope.
    for ad in filter_ads(ads, period, offer_scope):
        bucket = buckets[ad.date]
        bucket["revenue"] += ad.revenue
        bucket["spend"] += ad.spend

    # 3) Shared costs only for the unscoped view.
    if is_all_offers(offer_scope):
        for expense in filter_expenses(expenses, period, offer_scope):
            buckets[expense.date]["extras"] += expense.amount

        definitions = list(recurring)
        if definitions:
            for day, bucket in buckets.items():
                bucket["extras"] += accrue_recurring_for_day(definitions, day)

    # 4) Final rows with profit, ascending by date.
    rows = []
    for day in sorted(buckets):
        bucket = buckets[day]
        rows.append(
            {
                "date": pd.Timestamp(day),
                "date_label": day.strftime("%d/%m"),
                "revenue": bucket["revenue"],
                "spend": bucket["spend"],
                "extras": bucket["extras"],
                "profit": bucket["revenue"] - bucket["spend"] - bucket["extras"],
            }
        )

    return pd.DataFrame(rows, columns=SERIES_COLUMNS)
