# AdTracker - Profitability dashboard engine for digital-marketing teams
# Copyright (c) 2025 AdTracker contributors
# Licensed under the MIT License. See LICENSE file for details.

"""
Period helpers for AdTracker.

This module defines a Period value object and the resolver that turns a
symbolic date-range selector (today, last7days, thisMonth, ...) into concrete
inclusive calendar-day bounds, either for the period itself (offset 0) or for
the immediately preceding period of the same duration (offset > 0), used for
period-over-period comparison.

All bounds are plain calendar days. "Today" is never read from the wall clock
here: callers pass ``reference_today`` explicitly.
"""

from calendar import monthrange
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from .models import parse_day

DATE_RANGE_TYPES: tuple[str, ...] = (
    "today",
    "yesterday",
    "last3days",
    "last7days",
    "last30days",
    "thisMonth",
    "allTime",
    "custom",
)

# Nominal duration (in days) used to step back to the previous period.
# thisMonth uses a 30-day approximation unless the calendar_month policy is set.
RANGE_DURATION_DAYS: dict[str, int] = {
    "today": 1,
    "yesterday": 1,
    "last3days": 3,
    "last7days": 7,
    "last30days": 30,
    "thisMonth": 30,
}

THIS_MONTH_POLICIES: tuple[str, ...] = ("rolling_30_days", "calendar_month")

DEFAULT_EPOCH_FLOOR = date(2020, 1, 1)

RANGE_LABELS: dict[str, str] = {
    "today": "Today",
    "yesterday": "Yesterday",
    "last3days": "Last 3 days",
    "last7days": "Last 7 days",
    "last30days": "Last 30 days",
    "thisMonth": "This month",
    "allTime": "All time",
    "custom": "Custom period",
}


@dataclass(frozen=True)
class Period:
    """
    Inclusive calendar-day window with a human-readable label.

    A period whose ``end`` is the day before ``start`` is the empty window
    (zero days); every filter applied to it returns nothing.
    """

    start: date
    end: date
    label: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", parse_day(self.start))
        object.__setattr__(self, "end", parse_day(self.end))
        if self.end < self.start - timedelta(days=1):
            raise ValueError(
                f"Period end {self.end} cannot be before start {self.start}."
            )

    @property
    def days(self) -> int:
        """Number of calendar days covered (0 for the empty window)."""
        return (self.end - self.start).days + 1

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def iter_days(period: Period) -> Iterator[date]:
    """Yield every calendar day of the period in ascending order."""
    current = period.start
    while current <= period.end:
        yield current
        current += timedelta(days=1)


def _shift_months(day: date, months: int) -> date:
    """First day of the month ``months`` months before ``day``'s month."""
    index = day.year * 12 + (day.month - 1) - months
    return date(index // 12, index % 12 + 1, 1)


def _month_bounds(month_start: date) -> tuple[date, date]:
    last_day = monthrange(month_start.year, month_start.month)[1]
    return month_start, month_start.replace(day=last_day)


def _label(selector: str, offset: int) -> str:
    base = RANGE_LABELS[selector]
    if offset == 0:
        return base
    if offset == 1:
        return f"{base} (previous period)"
    return f"{base} ({offset} periods back)"


def resolve_period(
    selector: str,
    reference_today: date,
    offset: int = 0,
    custom_bounds: Optional[tuple[date, date]] = None,
    *,
    epoch_floor: date = DEFAULT_EPOCH_FLOOR,
    this_month_previous: str = "rolling_30_days",
) -> Period:
    """
    Resolve a date-range selector into an inclusive Period.

    Parameters
    ----------
    selector:
        One of DATE_RANGE_TYPES.
    reference_today:
        The day considered as "today" (injected, never read from the clock).
    offset:
        0 for the period itself; n > 0 for the period n durations earlier.
    custom_bounds:
        (start, end) inclusive bounds, required for the 'custom' selector.
    epoch_floor:
        Start bound of 'allTime'.
    this_month_previous:
        'rolling_30_days' steps the reference back 30 days per offset and
        takes the month containing it; 'calendar_month' takes the calendar
        month ``offset`` months earlier.

    Rules
    -----
    - Fixed-length selectors shift the reference back by
      ``offset * duration`` days before applying their bounds.
    - 'yesterday' additionally moves the reference back one day first.
    - 'allTime' with offset > 0, or with a reference day before
      ``epoch_floor``, yields the empty window just before ``epoch_floor``.
    - 'custom' with offset > 0 yields the window of equal length ending the
      day before the custom start.

    Raises
    ------
    ValueError
        Unknown selector or policy, negative offset, or 'custom' without
        valid bounds.
    """
    if selector not in DATE_RANGE_TYPES:
        raise ValueError(
            f"Unknown date range {selector!r}. "
            f"Expected one of: {', '.join(DATE_RANGE_TYPES)}."
        )
    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        raise ValueError(f"offset must be a non-negative integer (got {offset!r}).")
    if this_month_previous not in THIS_MONTH_POLICIES:
        raise ValueError(
            f"Unknown thisMonth policy {this_month_previous!r}. "
            f"Expected one of: {', '.join(THIS_MONTH_POLICIES)}."
        )

    today = parse_day(reference_today)
    label = _label(selector, offset)

    if selector == "custom":
        if custom_bounds is None:
            raise ValueError("The 'custom' date range requires explicit bounds.")
        start, end = (parse_day(b) for b in custom_bounds)
        if end < start:
            raise ValueError("Custom period end date cannot be before start date.")
        if offset == 0:
            return Period(start=start, end=end, label=f"Custom period ({start} → {end})")

        duration = (end - start).days + 1
        prev_end = start - timedelta(days=1 + (offset - 1) * duration)
        prev_start = prev_end - timedelta(days=duration - 1)
        return Period(start=prev_start, end=prev_end, label=label)

    if selector == "allTime":
        if offset > 0 or today < epoch_floor:
            return Period(
                start=epoch_floor,
                end=epoch_floor - timedelta(days=1),
                label=label,
            )
        return Period(start=epoch_floor, end=today, label=label)

    if selector == "thisMonth" and this_month_previous == "calendar_month":
        start, end = _month_bounds(_shift_months(today, offset))
        return Period(start=start, end=end, label=label)

    reference = today
    if selector == "yesterday":
        reference -= timedelta(days=1)
    reference -= timedelta(days=offset * RANGE_DURATION_DAYS[selector])

    if selector == "thisMonth":
        start, end = _month_bounds(reference.replace(day=1))
        return Period(start=start, end=end, label=label)

    duration = RANGE_DURATION_DAYS[selector]
    start = reference - timedelta(days=duration - 1)
    return Period(start=start, end=reference, label=label)
