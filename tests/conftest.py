from datetime import date

import pytest

from adtracker.models import (
    AdEntry,
    Dataset,
    ExpenseCategory,
    ExtraExpense,
    Offer,
    RecurringExpense,
)


@pytest.fixture
def sample_dataset() -> Dataset:
    """
    Small dataset spanning early May 2024.

    - two offers (o1, o2) plus ad entries for a deleted offer (o9),
    - one manual expense on 2024-05-02,
    - one recurring expense triggered on day 2 of each month.
    """
    offers = [
        Offer(id="o1", name="Robot vacuum", status="running", product_price=100, product_cost=40),
        Offer(id="o2", name="LED mask", status="testing"),
    ]
    ads = [
        AdEntry(id="a1", date=date(2024, 5, 1), offer_id="o1", spend=100, revenue=300),
        AdEntry(id="a2", date=date(2024, 5, 2), offer_id="o2", spend=50, revenue=40),
        AdEntry(id="a3", date=date(2024, 5, 3), offer_id="o1", spend=80, revenue=200),
        AdEntry(id="a4", date=date(2024, 5, 3), offer_id="o9", spend=10, revenue=0),
        AdEntry(id="a5", date=date(2024, 4, 28), offer_id="o1", spend=60, revenue=90),
    ]
    expenses = [
        ExtraExpense(
            id="e1",
            date=date(2024, 5, 2),
            amount=30,
            category=ExpenseCategory.DOMAIN_HOSTING,
            description="Domain renewal",
        ),
    ]
    recurring = [
        RecurringExpense(id="r1", name="Spy tool", amount=20, day_of_month=2),
    ]
    return Dataset(offers=offers, ads=ads, expenses=expenses, recurring=recurring)
