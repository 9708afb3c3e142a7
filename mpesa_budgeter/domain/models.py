"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class TransactionKind(str, Enum):
    """Closed set of money-movement kinds found in confirmation messages"""

    SEND = "send"
    RECEIVE = "receive"
    PAYBILL = "paybill"
    BUYGOODS = "buygoods"
    WITHDRAW = "withdraw"
    OTHER = "other"


class Cadence(str, Enum):
    """Recurrence period of a recurring bill"""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    @property
    def step_days(self) -> int:
        return _CADENCE_STEP_DAYS[self]


_CADENCE_STEP_DAYS = {
    Cadence.WEEKLY: 7,
    Cadence.BIWEEKLY: 14,
    Cadence.MONTHLY: 30,
}


class VelocityStatus(str, Enum):
    """Month-to-date spend compared against the pro-rata budget"""

    OVER = "over"
    UNDER = "under"
    ON_TRACK = "on-track"


@dataclass(frozen=True)
class TransactionRecord:
    """One confirmed money movement extracted from a vendor message"""

    external_id: str
    amount: Decimal
    occurred_at: datetime  # local wall-clock, no tzinfo
    kind: TransactionKind
    counterparty: str
    fee: Decimal
    balance_after: Decimal
    source_text: str
    category_id: Optional[str] = None

    @property
    def is_outflow(self) -> bool:
        return self.kind != TransactionKind.RECEIVE


@dataclass(frozen=True)
class RecurringBillForecast:
    """Predicted next occurrence of a bill paid on a regular cadence"""

    counterparty_label: str
    typical_amount: Decimal
    cadence: Cadence
    last_observed_at: datetime
    next_expected_at: datetime


@dataclass(frozen=True)
class SpendingVelocityReport:
    """Month-to-date burn rate and end-of-month projection"""

    daily_burn_rate: Decimal
    velocity_ratio: Optional[Decimal]  # None when the budget is zero
    status: VelocityStatus
    projected_end_balance: Decimal
    days_in_month: int
    days_remaining: int
    monthly_expenses: Decimal
    expected_spend_to_date: Decimal


@dataclass(frozen=True)
class Category:
    """Spending category with a monthly budget limit"""

    id: str
    name: str
    color: str
    budget_limit: Decimal


@dataclass
class CashflowSummary:
    """Totals across the whole transaction history"""

    income: Decimal
    expense: Decimal
    net: Decimal
    transaction_count: int


@dataclass
class DailyCashflow:
    """Income and expense for one calendar day"""

    day: date
    income: Decimal
    expense: Decimal


@dataclass
class CategorySpend:
    """Outflow attributed to one category"""

    category_id: str
    name: str
    color: str
    amount: Decimal
    budget_limit: Decimal
    utilization: Optional[Decimal]


@dataclass
class IngestionResult:
    """Outcome of parsing a batch of messages"""

    records: List[TransactionRecord] = field(default_factory=list)
    unrecognized: List[int] = field(default_factory=list)
    duplicates: List[str] = field(default_factory=list)
