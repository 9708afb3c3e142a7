"""Unit tests for cash-flow and category analytics"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from mpesa_budgeter.domain.categories import DEFAULT_CATEGORIES
from mpesa_budgeter.domain.models import Category, TransactionKind
from mpesa_budgeter.domain.summary import daily_cashflow, spending_by_category, summarize_cashflow


def test_summarize_cashflow(make_record):
    transactions = [
        make_record(amount="5000.00", kind=TransactionKind.RECEIVE),
        make_record(amount="1200.00", kind=TransactionKind.PAYBILL),
        make_record(amount="300.00", kind=TransactionKind.OTHER),
    ]

    summary = summarize_cashflow(transactions)

    assert summary.income == Decimal("5000.00")
    assert summary.expense == Decimal("1500.00")
    assert summary.net == Decimal("3500.00")
    assert summary.transaction_count == 3


def test_summarize_empty():
    summary = summarize_cashflow([])

    assert summary.income == summary.expense == summary.net == Decimal("0")
    assert summary.transaction_count == 0


def test_daily_cashflow_window(make_record, now: datetime):
    transactions = [
        make_record(amount="100.00", occurred_at=now - timedelta(hours=1)),
        make_record(amount="40.00", occurred_at=now - timedelta(hours=2)),
        make_record(amount="900.00", occurred_at=now - timedelta(days=2), kind=TransactionKind.RECEIVE),
        make_record(amount="77.00", occurred_at=now - timedelta(days=7)),  # outside the window
    ]

    daily = daily_cashflow(transactions, now, days=7)

    assert len(daily) == 7
    assert daily[0].day == date(2026, 3, 4)
    assert daily[-1].day == date(2026, 3, 10)
    assert daily[-1].expense == Decimal("140.00")
    assert daily[-3].income == Decimal("900.00")
    assert sum(d.expense for d in daily) == Decimal("140.00")


def test_daily_cashflow_zero_days(now: datetime):
    assert daily_cashflow([], now, days=0) == []


def test_spending_by_category_defaults(make_record):
    transactions = [
        make_record(amount="2500.00", category_id="food"),
        make_record(amount="500.00", category_id="food"),
        make_record(amount="400.00"),  # uncategorized goes to 'other'
        make_record(amount="8000.00", category_id="food", kind=TransactionKind.RECEIVE),
    ]

    spends = spending_by_category(transactions)

    assert [s.category_id for s in spends] == ["food", "other"]
    assert spends[0].amount == Decimal("3000.00")
    assert spends[0].utilization == Decimal("0.6")
    assert spends[1].amount == Decimal("400.00")
    assert spends[1].budget_limit == Decimal("2000")


def test_spending_by_category_custom_catalogue(make_record):
    categories = [
        Category(id="rent", name="Rent", color="#000000", budget_limit=Decimal("0")),
        Category(id="other", name="Misc", color="#ffffff", budget_limit=Decimal("100")),
    ]
    transactions = [make_record(amount="15000.00", category_id="rent")]

    spends = spending_by_category(transactions, categories)

    assert len(spends) == 1
    assert spends[0].name == "Rent"
    assert spends[0].utilization is None


def test_default_categories_budget_total():
    assert sum(c.budget_limit for c in DEFAULT_CATEGORIES) == Decimal("25000")
