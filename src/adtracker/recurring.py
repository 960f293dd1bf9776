# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Accrual of recurring (monthly, day-of-month triggered) expenses.

A RecurringExpense accrues its amount on every calendar day whose
day-of-month equals its ``day_of_month``. The match is literal: a definition
on day 31 contributes nothing in months with fewer than 31 days, and days
29/30 are skipped in February when the month is too short. There is no
rollover to the last day of a short month.

Recurring costs are shared, so they accrue only for the unscoped
(all offers) view.
"""

from collections.abc import Iterable
from datetime import date

from .filters import is_all_offers
from .models import ALL_OFFERS, RecurringExpense
from .periods import Period, iter_days


def accrue_recurring_for_day(
    recurring: Iterable[RecurringExpense],
    day: date,
) -> float:
    """Sum the recurring amounts triggered on ``day``."""
    return sum(
        (rec.amount for rec in recurring if rec.day_of_month == day.day),
        0.0,
    )


def accrue_recurring(
    recurring: Iterable[RecurringExpense],
    period: Period,
    offer_scope: str = ALL_OFFERS,
) -> float:
    """
    Total recurring expense accrued over ``period``.

    Walks every day of the period and adds each definition whose trigger
    day matches. Returns 0.0 for any single-offer scope and for the empty
    period.
    """
    if not is_all_offers(offer_scope):
        return 0.0

    definitions = list(recurring)
    if not definitions:
        return 0.0

    total = 0.0
    for day in iter_days(period):
        total += accrue_recurring_for_day(definitions, day)
    return total
