"""Cash-flow totals, daily series and per-category spend"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from mpesa_budgeter.domain.categories import DEFAULT_CATEGORIES, FALLBACK_CATEGORY_ID
from mpesa_budgeter.domain.models import (
    CashflowSummary,
    Category,
    CategorySpend,
    DailyCashflow,
    TransactionRecord,
)
from mpesa_budgeter.utils.date_utils import generate_date_range

ZERO = Decimal("0")


def summarize_cashflow(transactions: List[TransactionRecord]) -> CashflowSummary:
    """Incoming transfers count as income, every other kind as expense"""
    income = sum((t.amount for t in transactions if not t.is_outflow), ZERO)
    expense = sum((t.amount for t in transactions if t.is_outflow), ZERO)

    return CashflowSummary(
        income=income,
        expense=expense,
        net=income - expense,
        transaction_count=len(transactions),
    )


def daily_cashflow(
    transactions: List[TransactionRecord],
    now: Optional[datetime] = None,
    days: int = 7,
) -> List[DailyCashflow]:
    """
    Income/expense per calendar day for the last `days` days ending today.

    Oldest day first; days without activity are kept with zero totals.
    """
    if now is None:
        now = datetime.now()
    if days <= 0:
        return []

    end = now.date()
    window = generate_date_range(end - timedelta(days=days - 1), end)
    buckets = {day: DailyCashflow(day=day, income=ZERO, expense=ZERO) for day in window}

    for txn in transactions:
        bucket = buckets.get(txn.occurred_at.date())
        if bucket is None:
            continue
        if txn.is_outflow:
            bucket.expense += txn.amount
        else:
            bucket.income += txn.amount

    return [buckets[day] for day in window]


def spending_by_category(
    transactions: List[TransactionRecord],
    categories: Optional[List[Category]] = None,
) -> List[CategorySpend]:
    """
    Outflow totals per category, in catalogue order.

    Uncategorized outflows land in the 'other' category. Categories with
    no spend are omitted.
    """
    if categories is None:
        categories = DEFAULT_CATEGORIES

    totals: Dict[str, Decimal] = {}
    for txn in transactions:
        if not txn.is_outflow:
            continue
        category_id = txn.category_id or FALLBACK_CATEGORY_ID
        totals[category_id] = totals.get(category_id, ZERO) + txn.amount

    spends = []
    for category in categories:
        amount = totals.get(category.id, ZERO)
        if amount <= 0:
            continue
        utilization = amount / category.budget_limit if category.budget_limit > 0 else None
        spends.append(
            CategorySpend(
                category_id=category.id,
                name=category.name,
                color=category.color,
                amount=amount,
                budget_limit=category.budget_limit,
                utilization=utilization,
            )
        )

    return spends
