"""Spending velocity - month-to-date burn rate against a linear budget"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from mpesa_budgeter.domain.models import SpendingVelocityReport, TransactionRecord, VelocityStatus
from mpesa_budgeter.utils.date_utils import days_in_month, same_month

OVER_THRESHOLD = Decimal("1.15")
UNDER_THRESHOLD = Decimal("0.85")


def month_to_date_expenses(transactions: List[TransactionRecord], now: datetime) -> Decimal:
    """Sum of outflows in now's calendar month"""
    return sum(
        (t.amount for t in transactions if t.is_outflow and same_month(t.occurred_at, now)),
        Decimal("0"),
    )


def classify_velocity(ratio: Decimal) -> VelocityStatus:
    """Band edges 0.85 and 1.15 are on-track"""
    if ratio > OVER_THRESHOLD:
        return VelocityStatus.OVER
    elif ratio < UNDER_THRESHOLD:
        return VelocityStatus.UNDER
    return VelocityStatus.ON_TRACK


def calculate_spending_velocity(
    transactions: List[TransactionRecord],
    monthly_budget: Decimal,
    current_balance: Decimal,
    now: Optional[datetime] = None,
) -> SpendingVelocityReport:
    """
    Compare month-to-date spend with the pro-rata budget.

    - daily burn = expenses so far / day of month
    - projected end balance = balance minus the spend still expected
      for the remaining days
    - ratio = expenses / (budget / days in month * day of month)

    With a zero budget the ratio is undefined (None); any spend counts
    as over, no spend as on-track.

    Budget and balance may be given as int or float; they are converted
    through their string form so 0.1 stays 0.1.
    """
    if now is None:
        now = datetime.now()

    monthly_budget = Decimal(str(monthly_budget))
    current_balance = Decimal(str(current_balance))

    month_days = days_in_month(now.year, now.month)
    day_of_month = now.day

    monthly_expenses = month_to_date_expenses(transactions, now)
    daily_burn_rate = monthly_expenses / day_of_month

    projected_total_expenses = daily_burn_rate * month_days
    projected_end_balance = current_balance - (projected_total_expenses - monthly_expenses)

    expected_spend_to_date = (monthly_budget / month_days) * day_of_month

    if expected_spend_to_date > 0:
        velocity_ratio = monthly_expenses / expected_spend_to_date
        status = classify_velocity(velocity_ratio)
    else:
        velocity_ratio = None
        status = VelocityStatus.OVER if monthly_expenses > 0 else VelocityStatus.ON_TRACK

    return SpendingVelocityReport(
        daily_burn_rate=daily_burn_rate,
        velocity_ratio=velocity_ratio,
        status=status,
        projected_end_balance=projected_end_balance,
        days_in_month=month_days,
        days_remaining=month_days - day_of_month,
        monthly_expenses=monthly_expenses,
        expected_spend_to_date=expected_spend_to_date,
    )
