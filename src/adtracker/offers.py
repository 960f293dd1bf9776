# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Offer economics for AdTracker.

Two views are provided:

1. All-time offer statistics (``compute_offer_stats``)
   ----------------------------------------------------
   For every existing offer: total spend, revenue, profit and ROI over all
   of its ad entries (no date filtering), plus the unit economics derived
   from the offer's price and cost:

       margin          = product_price - product_cost
       max_cpa         = margin
       break_even_roas = product_price / margin

   A missing or non-positive price, or a non-positive margin, means there is
   no meaningful break-even point: both values are reported as 0.0.

2. Per-offer breakdown of a period (``offer_breakdown``)
   ------------------------------------------------------
   Attribution of the period's ad entries to offers. Entries that reference
   a deleted offer are kept under a "Deleted offer" label so that totals are
   unaffected.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from .engine import safe_ratio
from .filters import filter_ads
from .models import AdEntry, Offer, OfferStatus
from .periods import Period

DELETED_OFFER_LABEL = "Deleted offer"

BREAKDOWN_COLUMNS: list[str] = [
    "offer_id",
    "offer_name",
    "spend",
    "revenue",
    "profit",
    "roas",
]


@dataclass(frozen=True)
class OfferStats:
    """
    All-time economics of one offer.

    Attributes:
        offer_id, name, status, product_price, product_cost:
            Copied from the Offer.
        total_spend: Sum of spend over all ad entries of the offer.
        total_revenue: Sum of revenue over all ad entries of the offer.
        profit: total_revenue - total_spend.
        roi: profit / total_spend * 100, 0.0 when spend is 0.
        break_even_roas: product_price / margin, 0.0 when not computable.
        max_cpa: margin (price - cost), 0.0 when not computable.
    """

    offer_id: str
    name: str
    status: OfferStatus
    product_price: Optional[float]
    product_cost: Optional[float]
    total_spend: float
    total_revenue: float
    profit: float
    roi: float
    break_even_roas: float
    max_cpa: float


def compute_unit_economics(
    product_price: Optional[float],
    product_cost: Optional[float],
) -> tuple[float, float]:
    """
    Return ``(break_even_roas, max_cpa)`` for a unit price and cost.

    A missing cost counts as 0. Both values are 0.0 when the price is
    missing or not positive, or when the margin is not positive.
    """
    if product_price is None or product_price <= 0:
        return 0.0, 0.0

    margin = product_price - (product_cost or 0.0)
    if margin <= 0:
        return 0.0, 0.0

    return product_price / margin, margin


def compute_offer_stats(
    offers: Iterable[Offer],
    ads: Iterable[AdEntry],
) -> list[OfferStats]:
    """Compute all-time statistics for each offer, in input order."""
    spend_by_offer: dict[str, float] = {}
    revenue_by_offer: dict[str, float] = {}
    for ad in ads:
        spend_by_offer[ad.offer_id] = spend_by_offer.get(ad.offer_id, 0.0) + ad.spend
        revenue_by_offer[ad.offer_id] = (
            revenue_by_offer.get(ad.offer_id, 0.0) + ad.revenue
        )

    results: list[OfferStats] = []
    for offer in offers:
        total_spend = spend_by_offer.get(offer.id, 0.0)
        total_revenue = revenue_by_offer.get(offer.id, 0.0)
        profit = total_revenue - total_spend
        break_even_roas, max_cpa = compute_unit_economics(
            offer.product_price, offer.product_cost
        )

        results.append(
            OfferStats(
                offer_id=offer.id,
                name=offer.name,
                status=offer.status,
                product_price=offer.product_price,
                product_cost=offer.product_cost,
                total_spend=total_spend,
                total_revenue=total_revenue,
                profit=profit,
                roi=safe_ratio(profit, total_spend) * 100,
                break_even_roas=break_even_roas,
                max_cpa=max_cpa,
            )
        )

    return results


def offer_breakdown(
    ads: Iterable[AdEntry],
    offers: Iterable[Offer],
    period: Period,
) -> pd.DataFrame:
    """
    Attribute the period's ad entries to offers.

    Returns one row per offer id present in the period, sorted by descending
    revenue then offer id. Orphaned entries are labelled DELETED_OFFER_LABEL.
    """
    names = {offer.id: offer.name for offer in offers}

    totals: dict[str, dict[str, float]] = {}
    for ad in filter_ads(ads, period):
        bucket = totals.setdefault(ad.offer_id, {"spend": 0.0, "revenue": 0.0})
        bucket["spend"] += ad.spend
        bucket["revenue"] += ad.revenue

    if not totals:
        return pd.DataFrame(columns=BREAKDOWN_COLUMNS)

    rows = [
        {
            "offer_id": offer_id,
            "offer_name": names.get(offer_id, DELETED_OFFER_LABEL),
            "spend": values["spend"],
            "revenue": values["revenue"],
            "profit": values["revenue"] - values["spend"],
            "roas": safe_ratio(values["revenue"], values["spend"]),
        }
        for offer_id, values in totals.items()
    ]

    df = pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)
    df = df.sort_values(
        ["revenue", "offer_id"], ascending=[False, True], kind="stable"
    )
    return df.reset_index(drop=True)
