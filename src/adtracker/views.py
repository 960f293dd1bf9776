# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
View utilities for AdTracker.

This module turns engine results into pandas DataFrames ready to be printed
(``DataFrame.to_string``) or exported (``DataFrame.to_csv``) by the CLI or
any other presentation layer. No computation happens here beyond rounding
and formatting.
"""

from typing import Optional

import pandas as pd

from .engine import METRIC_FIELDS, DashboardMetrics, compute_growth
from .offers import OfferStats

OFFER_STATS_COLUMNS: list[str] = [
    "offer_id",
    "name",
    "status",
    "product_price",
    "product_cost",
    "total_spend",
    "total_revenue",
    "profit",
    "roi",
    "break_even_roas",
    "max_cpa",
]


def format_growth(current: float, previous: float) -> str:
    """
    Render period-over-period growth the way the dashboard cards show it.

    Examples: "+12.5%", "-3.0%", "+100%" (no previous value), "0%".
    A negative previous value keeps its sign: -100 to -50 renders "-50.0%".
    """
    if previous == 0:
        return "+100%" if current > 0 else "0%"
    growth = compute_growth(current, previous)
    sign = "+" if growth > 0 else ""
    return f"{sign}{growth:.1f}%"


def format_amount(value: float, currency: str, decimals: int = 2) -> str:
    return f"{currency} {value:,.{decimals}f}"


def metrics_to_dataframe(
    metrics: DashboardMetrics,
    decimals: int,
    previous: Optional[DashboardMetrics] = None,
) -> pd.DataFrame:
    """
    Convert DashboardMetrics into a DataFrame with one row per metric.

    Columns: key, label, value, unit, and, when ``previous`` is given,
    previous and growth (formatted string).
    """
    current_values = metrics.as_dict()
    previous_values = previous.as_dict() if previous is not None else None

    rows: list[dict[str, object]] = []
    for key, label, unit in METRIC_FIELDS:
        row: dict[str, object] = {
            "key": key,
            "label": label,
            "value": round(current_values[key], decimals),
            "unit": unit,
        }
        if previous_values is not None:
            row["previous"] = round(previous_values[key], decimals)
            row["growth"] = format_growth(current_values[key], previous_values[key])
        rows.append(row)

    return pd.DataFrame(rows)


def offer_stats_to_dataframe(stats: list[OfferStats], decimals: int) -> pd.DataFrame:
    """
    Convert a list of OfferStats into a DataFrame, sorted by descending profit.

    Break-even ROAS and max CPA equal to 0 mean "not computable" and are
    shown as NaN.
    """
    if not stats:
        return pd.DataFrame(columns=OFFER_STATS_COLUMNS)

    rows: list[dict[str, object]] = []
    for s in stats:
        rows.append(
            {
                "offer_id": s.offer_id,
                "name": s.name,
                "status": s.status.label,
                "product_price": s.product_price,
                "product_cost": s.product_cost,
                "total_spend": round(s.total_spend, decimals),
                "total_revenue": round(s.total_revenue, decimals),
                "profit": round(s.profit, decimals),
                "roi": round(s.roi, decimals),
                "break_even_roas": (
                    round(s.break_even_roas, decimals)
                    if s.break_even_roas > 0
                    else float("nan")
                ),
                "max_cpa": (
                    round(s.max_cpa, decimals) if s.max_cpa > 0 else float("nan")
                ),
            }
        )

    df = pd.DataFrame(rows, columns=OFFER_STATS_COLUMNS)
    df = df.sort_values(["profit", "offer_id"], ascending=[False, True], kind="stable")
    return df.reset_index(drop=True)


def round_frame(df: pd.DataFrame, decimals: int) -> pd.DataFrame:
    """Round every float column of a DataFrame (returns a copy)."""
    out = df.copy()
    float_cols = out.select_dtypes(include="float").columns
    out[float_cols] = out[float_cols].round(decimals)
    return out
