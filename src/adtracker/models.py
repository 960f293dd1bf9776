# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Record types for AdTracker.

This module defines the plain, immutable records consumed by the metrics
engine:

- Offer            : a product/offer being advertised (weakly referenced),
- AdEntry          : one day of traffic result for an offer (spend, revenue),
- ExtraExpense     : a manual operating expense,
- RecurringExpense : a standing monthly obligation triggered on a day of month,
- Dataset          : the four read-only collections bundled together.

Records validate themselves at construction time so that contract violations
(negative amounts, malformed dates, invalid day of month) fail at the
boundary instead of silently producing wrong numbers deep in aggregation.

Field names are the semantic ones; translating a storage representation
(snake_case columns, camelCase exports) is the job of ``io.py``.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

import pandas as pd

# Offer scope meaning "every offer" (no per-offer restriction).
ALL_OFFERS = "all"


def parse_day(value: Any) -> date:
    """
    Normalize a date-like value to a calendar day.

    Accepted inputs:
        - datetime.date
        - datetime.datetime / pandas.Timestamp (time component dropped,
          no timezone conversion)
        - ISO strings "YYYY-MM-DD" or "YYYY-MM-DDTHH:MM:SS..." (only the
          calendar part is kept)

    Raises:
        ValueError: if the value cannot be interpreted as a calendar day.
    """
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            raise ValueError("Missing date value.")
        return date(value.year, value.month, value.day)

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        raw = value.strip()
        try:
            return date.fromisoformat(raw[:10])
        except ValueError as exc:
            raise ValueError(
                f"Invalid date {value!r}, expected YYYY-MM-DD format."
            ) from exc

    raise ValueError(f"Unsupported date value: {value!r}")


def _non_negative(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}.") from exc

    if pd.isna(number):
        raise ValueError(f"{name} must be a number, got NaN.")
    if number < 0:
        raise ValueError(f"{name} cannot be negative (got {number}).")
    return number


def _optional_non_negative(name: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    return _non_negative(name, value)


class LabelledEnum(str, Enum):
    """String enum with a human-readable label and lenient parsing."""

    def __new__(cls, value: str, label: str, *aliases: str):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.label = label
        obj.aliases = aliases
        return obj

    @classmethod
    def parse(cls, raw: Any):
        """
        Return the member matching a value, name, label or alias.

        Matching is case-insensitive. Aliases hold the labels the hosted store
        persists (e.g. "Em Teste"), so raw exports parse as-is.
        """
        if isinstance(raw, cls):
            return raw

        key = str(raw).strip().casefold()
        for member in cls:
            names = (member.value, member.name, member.label, *member.aliases)
            if key in (name.casefold() for name in names):
                return member

        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"Invalid {cls.__name__} {raw!r}. Expected one of: {allowed}.")


class OfferStatus(LabelledEnum):
    RUNNING = ("running", "Running / Scaling", "Rodando / Escala")
    VALIDATED = ("validated", "Validated", "Validada")
    PRODUCING = ("producing", "In production", "Em Produção")
    TESTING = ("testing", "Testing", "Em Teste")
    PAUSED = ("paused", "Paused", "Pausada")


class ExpenseCategory(LabelledEnum):
    BM_CONTINGENCY = ("bm_contingency", "BM / Contingency", "BM / Contingência")
    DOMAIN_HOSTING = ("domain_hosting", "Domain / Hosting", "Domínio / Hospedagem")
    CHARGEBACK_REFUND = ("chargeback_refund", "Chargeback / Refund", "Chargeback / Reembolso")
    TOOLS_SAAS = ("tools_saas", "Tools / SaaS", "Ferramentas / SaaS")
    OTHER = ("other", "Other", "Outros")


@dataclass(frozen=True)
class Offer:
    """An advertised offer with optional unit economics."""

    id: str
    name: str
    status: OfferStatus = OfferStatus.TESTING
    product_price: Optional[float] = None
    product_cost: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "status", OfferStatus.parse(self.status))
        object.__setattr__(
            self,
            "product_price",
            _optional_non_negative("product_price", self.product_price),
        )
        object.__setattr__(
            self,
            "product_cost",
            _optional_non_negative("product_cost", self.product_cost),
        )


@dataclass(frozen=True)
class AdEntry:
    """
    One day of traffic result for an offer.

    ``offer_id`` is a weak reference: the offer may have been deleted since
    the entry was recorded.
    """

    id: str
    date: date
    offer_id: str
    spend: float = 0.0
    revenue: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "date", parse_day(self.date))
        object.__setattr__(self, "offer_id", str(self.offer_id))
        object.__setattr__(self, "spend", _non_negative("spend", self.spend))
        object.__setattr__(self, "revenue", _non_negative("revenue", self.revenue))


@dataclass(frozen=True)
class ExtraExpense:
    """A manual operating expense, never attributable to a single offer."""

    id: str
    date: date
    amount: float
    category: ExpenseCategory = ExpenseCategory.OTHER
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "date", parse_day(self.date))
        object.__setattr__(self, "amount", _non_negative("amount", self.amount))
        object.__setattr__(self, "category", ExpenseCategory.parse(self.category))


@dataclass(frozen=True)
class RecurringExpense:
    """
    A standing monthly obligation.

    It is a rule, not a transaction: it accrues ``amount`` on every calendar
    day whose day-of-month equals ``day_of_month``.
    """

    id: str
    name: str
    amount: float
    day_of_month: int
    category: ExpenseCategory = ExpenseCategory.OTHER

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "amount", _non_negative("amount", self.amount))
        object.__setattr__(self, "category", ExpenseCategory.parse(self.category))

        day = self.day_of_month
        if isinstance(day, bool):
            raise ValueError(f"day_of_month must be an integer, got {day!r}.")
        if not isinstance(day, int):
            try:
                as_float = float(day)
            except (TypeError, ValueError) as exc:
                raise ValueError(
                    f"day_of_month must be an integer, got {day!r}."
                ) from exc
            if not as_float.is_integer():
                raise ValueError(f"day_of_month must be an integer, got {day!r}.")
            day = int(as_float)

        if not 1 <= day <= 31:
            raise ValueError(f"day_of_month must be between 1 and 31 (got {day}).")
        object.__setattr__(self, "day_of_month", day)


@dataclass(frozen=True)
class Dataset:
    """The four read-only record collections the engine works on."""

    offers: tuple[Offer, ...] = field(default_factory=tuple)
    ads: tuple[AdEntry, ...] = field(default_factory=tuple)
    expenses: tuple[ExtraExpense, ...] = field(default_factory=tuple)
    recurring: tuple[RecurringExpense, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "offers", tuple(self.offers))
        object.__setattr__(self, "ads", tuple(self.ads))
        object.__setattr__(self, "expenses", tuple(self.expenses))
        object.__setattr__(self, "recurring", tuple(self.recurring))

    def offer_by_id(self) -> dict[str, Offer]:
        return {offer.id: offer for offer in self.offers}
