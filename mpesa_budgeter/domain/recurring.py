"""Recurring bill detection - infers cadence from repeated outflows to the same counterparty"""

from collections import defaultdict
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

from mpesa_budgeter.domain.models import Cadence, RecurringBillForecast, TransactionRecord
from mpesa_budgeter.utils.date_utils import whole_days_between

MIN_OBSERVATIONS = 2

# Mean gap below these bounds (days) selects the cadence
WEEKLY_MAX_GAP = 10
BIWEEKLY_MAX_GAP = 20

FORECAST_HORIZON_DAYS = 60
OVERDUE_GRACE_DAYS = 7


def group_by_counterparty(transactions: List[TransactionRecord]) -> Dict[str, List[TransactionRecord]]:
    """Outflows keyed by lower-cased counterparty name"""
    groups: Dict[str, List[TransactionRecord]] = defaultdict(list)
    for txn in transactions:
        if txn.is_outflow:
            groups[txn.counterparty.lower()].append(txn)
    return groups


def interval_samples(sorted_txns: List[TransactionRecord]) -> List[int]:
    """Day gaps between consecutive observations; same-day repeats are skipped"""
    gaps = []
    for previous, current in zip(sorted_txns, sorted_txns[1:]):
        days = whole_days_between(current.occurred_at, previous.occurred_at)
        if days > 0:
            gaps.append(days)
    return gaps


def classify_cadence(mean_gap: float) -> Cadence:
    if mean_gap < WEEKLY_MAX_GAP:
        return Cadence.WEEKLY
    elif mean_gap < BIWEEKLY_MAX_GAP:
        return Cadence.BIWEEKLY
    return Cadence.MONTHLY


def display_label(key: str) -> str:
    """Capitalize the first letter of the normalized grouping key"""
    return key[:1].upper() + key[1:]


def typical_amount(txns: List[TransactionRecord]) -> Decimal:
    """Mean amount rounded half-up to a whole unit"""
    mean = sum((t.amount for t in txns), Decimal("0")) / len(txns)
    return mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def is_within_window(next_expected_at: datetime, now: datetime) -> bool:
    days_until = whole_days_between(next_expected_at, now)
    return -OVERDUE_GRACE_DAYS <= days_until <= FORECAST_HORIZON_DAYS


def detect_recurring_bills(
    transactions: List[TransactionRecord],
    now: Optional[datetime] = None,
) -> List[RecurringBillForecast]:
    """
    Detect recurring bills from transaction history.

    Heuristic, recomputed from scratch on every call:
    - Incoming transfers are ignored
    - Outflows are grouped by case-insensitive counterparty
    - Groups need at least two observations on different days
    - Mean gap picks the cadence (weekly < 10 days <= biweekly < 20 days <= monthly)
    - Forecasts outside [-7, +60] days from now are dropped

    Returns:
        Forecasts sorted by next expected date
    """
    if now is None:
        now = datetime.now()

    forecasts = []
    for key, txns in group_by_counterparty(transactions).items():
        if len(txns) < MIN_OBSERVATIONS:
            continue

        sorted_txns = sorted(txns, key=lambda t: t.occurred_at)
        gaps = interval_samples(sorted_txns)
        if not gaps:
            continue

        cadence = classify_cadence(sum(gaps) / len(gaps))
        last_observed_at = sorted_txns[-1].occurred_at
        next_expected_at = last_observed_at + timedelta(days=cadence.step_days)

        if not is_within_window(next_expected_at, now):
            continue

        forecasts.append(
            RecurringBillForecast(
                counterparty_label=display_label(key),
                typical_amount=typical_amount(sorted_txns),
                cadence=cadence,
                last_observed_at=last_observed_at,
                next_expected_at=next_expected_at,
            )
        )

    return sorted(forecasts, key=lambda f: f.next_expected_at)
