# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Record selection for a resolved period and offer scope.

Ad entries are kept when their day falls inside the period (bounds
inclusive) and, for a single-offer scope, when they belong to that offer.

Manual expenses are operating costs shared by every offer: they are kept for
the unscoped view only. Under a single-offer scope they are excluded
entirely, so per-offer views show ad economics alone.
"""

from collections.abc import Iterable

from .models import ALL_OFFERS, AdEntry, ExtraExpense
from .periods import Period


def is_all_offers(offer_scope: str) -> bool:
    """Return True when the scope covers every offer."""
    return str(offer_scope) == ALL_OFFERS


def filter_ads(
    ads: Iterable[AdEntry],
    period: Period,
    offer_scope: str = ALL_OFFERS,
) -> list[AdEntry]:
    """Return the ad entries inside ``period`` matching ``offer_scope``."""
    scope = str(offer_scope)
    return [
        ad
        for ad in ads
        if period.contains(ad.date) and (scope == ALL_OFFERS or ad.offer_id == scope)
    ]


def filter_expenses(
    expenses: Iterable[ExtraExpense],
    period: Period,
    offer_scope: str = ALL_OFFERS,
) -> list[ExtraExpense]:
    """
    Return the manual expenses inside ``period``.

    An empty list is returned for any single-offer scope.
    """
    if not is_all_offers(offer_scope):
        return []
    return [expense for expense in expenses if period.contains(expense.date)]
