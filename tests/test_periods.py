from datetime import date

import pytest

from adtracker.periods import Period, iter_days, resolve_period

TODAY = date(2024, 5, 15)


@pytest.mark.parametrize(
    "selector, expected_start, expected_end",
    [
        ("today", date(2024, 5, 15), date(2024, 5, 15)),
        ("yesterday", date(2024, 5, 14), date(2024, 5, 14)),
        ("last3days", date(2024, 5, 13), date(2024, 5, 15)),
        ("last7days", date(2024, 5, 9), date(2024, 5, 15)),
        ("last30days", date(2024, 4, 16), date(2024, 5, 15)),
        ("thisMonth", date(2024, 5, 1), date(2024, 5, 31)),
        ("allTime", date(2020, 1, 1), date(2024, 5, 15)),
    ],
)
def test_resolve_period_current(selector, expected_start, expected_end) -> None:
    """Offset 0 returns the selector's own bounds relative to the reference day."""
    period = resolve_period(selector, TODAY)

    assert period.start == expected_start
    assert period.end == expected_end


@pytest.mark.parametrize(
    "selector, expected_start, expected_end",
    [
        ("today", date(2024, 5, 14), date(2024, 5, 14)),
        ("yesterday", date(2024, 5, 13), date(2024, 5, 13)),
        ("last3days", date(2024, 5, 10), date(2024, 5, 12)),
        ("last7days", date(2024, 5, 2), date(2024, 5, 8)),
        ("last30days", date(2024, 3, 17), date(2024, 4, 15)),
        ("thisMonth", date(2024, 4, 1), date(2024, 4, 30)),
    ],
)
def test_resolve_period_previous(selector, expected_start, expected_end) -> None:
    """Offset 1 steps back by the selector's nominal duration."""
    period = resolve_period(selector, TODAY, offset=1)

    assert period.start == expected_start
    assert period.end == expected_end


def test_previous_last7days_has_same_length_and_is_adjacent() -> None:
    """The previous 7-day window ends the day before the current one starts."""
    current = resolve_period("last7days", TODAY, 0)
    previous = resolve_period("last7days", TODAY, 1)

    assert previous.days == current.days == 7
    assert (current.start - previous.end).days == 1


def test_yesterday_offset_two_is_three_days_back() -> None:
    period = resolve_period("yesterday", TODAY, offset=2)
    assert period.start == period.end == date(2024, 5, 12)


def test_this_month_rolling_approximation_keeps_30_day_step() -> None:
    """
    With the rolling policy the previous period of thisMonth is the month
    containing (reference - 30 days), even when that is the same month.
    """
    period = resolve_period("thisMonth", date(2024, 3, 31), offset=1)

    assert period.start == date(2024, 3, 1)
    assert period.end == date(2024, 3, 31)


def test_this_month_calendar_policy_uses_previous_month() -> None:
    period = resolve_period(
        "thisMonth", date(2024, 3, 31), offset=1, this_month_previous="calendar_month"
    )
    assert period.start == date(2024, 2, 1)
    assert period.end == date(2024, 2, 29)

    january = resolve_period(
        "thisMonth", date(2024, 1, 10), offset=1, this_month_previous="calendar_month"
    )
    assert january.start == date(2023, 12, 1)
    assert january.end == date(2023, 12, 31)


def test_all_time_previous_period_is_empty_window_before_epoch() -> None:
    period = resolve_period("allTime", TODAY, offset=1)

    assert period.start == date(2020, 1, 1)
    assert period.end == date(2019, 12, 31)
    assert period.days == 0
    assert period.is_empty
    assert list(iter_days(period)) == []


def test_all_time_before_epoch_floor_is_empty_window() -> None:
    """A reference day earlier than the epoch floor resolves to nothing."""
    period = resolve_period("allTime", date(2019, 6, 1))

    assert period.start == date(2020, 1, 1)
    assert period.end == date(2019, 12, 31)
    assert period.is_empty

    later_floor = resolve_period("allTime", TODAY, epoch_floor=date(2025, 1, 1))
    assert later_floor.days == 0


def test_all_time_uses_configured_epoch_floor() -> None:
    period = resolve_period("allTime", TODAY, epoch_floor=date(2023, 6, 1))
    assert period.start == date(2023, 6, 1)


def test_custom_period_offsets() -> None:
    """Custom bounds are returned verbatim, previous windows have equal length."""
    bounds = (date(2024, 5, 1), date(2024, 5, 10))

    current = resolve_period("custom", TODAY, 0, bounds)
    previous = resolve_period("custom", TODAY, 1, bounds)
    before = resolve_period("custom", TODAY, 2, bounds)

    assert (current.start, current.end) == bounds
    assert (previous.start, previous.end) == (date(2024, 4, 21), date(2024, 4, 30))
    assert (before.start, before.end) == (date(2024, 4, 11), date(2024, 4, 20))


def test_custom_period_accepts_iso_strings() -> None:
    period = resolve_period("custom", TODAY, 0, ("2024-03-05", "2024-03-05T23:59:00Z"))
    assert period.start == period.end == date(2024, 3, 5)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"selector": "custom"},
        {"selector": "custom", "custom_bounds": (date(2024, 5, 10), date(2024, 5, 1))},
        {"selector": "lastYear"},
        {"selector": "today", "offset": -1},
        {"selector": "thisMonth", "this_month_previous": "quarterly"},
    ],
)
def test_resolve_period_rejects_invalid_arguments(kwargs) -> None:
    with pytest.raises(ValueError):
        resolve_period(reference_today=TODAY, **kwargs)


def test_iter_days_is_inclusive_and_ordered() -> None:
    period = Period(start=date(2024, 2, 28), end=date(2024, 3, 1))
    assert list(iter_days(period)) == [
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]


def test_period_rejects_reversed_bounds() -> None:
    with pytest.raises(ValueError):
        Period(start=date(2024, 5, 10), end=date(2024, 5, 1))
