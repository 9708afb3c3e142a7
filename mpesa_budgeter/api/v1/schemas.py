"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from mpesa_budgeter.domain.exceptions import InvalidTransactionDataError
from mpesa_budgeter.domain.models import (
    CashflowSummary,
    Category,
    CategorySpend,
    DailyCashflow,
    RecurringBillForecast,
    SpendingVelocityReport,
    TransactionKind,
    TransactionRecord,
)


class TransactionSchema(BaseModel):
    """Transaction as produced by the parser and stored by the caller"""

    external_id: str = Field(..., min_length=1, description="Vendor confirmation code")
    amount: Decimal = Field(..., ge=0)
    occurred_at: datetime
    kind: TransactionKind
    counterparty: str
    fee: Decimal = Field(Decimal("0"), ge=0)
    balance_after: Decimal = Field(Decimal("0"), ge=0)
    source_text: str = Field(..., min_length=1)
    category_id: Optional[str] = None

    @classmethod
    def from_domain(cls, record: TransactionRecord) -> "TransactionSchema":
        return cls(
            external_id=record.external_id,
            amount=record.amount,
            occurred_at=record.occurred_at,
            kind=record.kind,
            counterparty=record.counterparty,
            fee=record.fee,
            balance_after=record.balance_after,
            source_text=record.source_text,
            category_id=record.category_id,
        )

    def to_domain(self) -> TransactionRecord:
        """Convert to a domain record, keeping only the wall-clock part of the timestamp"""
        if not self.external_id.strip() or not self.source_text.strip():
            raise InvalidTransactionDataError("Transaction id and source text must not be blank")

        return TransactionRecord(
            external_id=self.external_id,
            amount=self.amount,
            occurred_at=self.occurred_at.replace(tzinfo=None),
            kind=self.kind,
            counterparty=self.counterparty,
            fee=self.fee,
            balance_after=self.balance_after,
            source_text=self.source_text,
            category_id=self.category_id,
        )


def to_domain_records(transactions: List[TransactionSchema]) -> List[TransactionRecord]:
    return [t.to_domain() for t in transactions]


class ParseRequest(BaseModel):
    """Request body for POST /v1/messages/parse"""

    text: str = Field(..., min_length=1, description="Raw confirmation SMS")


class BatchParseRequest(BaseModel):
    """Request body for POST /v1/messages/batch"""

    messages: List[str] = Field(..., min_length=1)


class BatchParseResponse(BaseModel):
    """Response for POST /v1/messages/batch"""

    transactions: List[TransactionSchema]
    unrecognized: List[int]
    duplicates: List[str]


class TransactionsRequest(BaseModel):
    """Transaction history supplied by the caller"""

    transactions: List[TransactionSchema] = Field(default_factory=list)


class RecurringBillSchema(BaseModel):
    """Single recurring bill forecast"""

    counterparty_label: str
    typical_amount: float
    cadence: str
    last_observed_at: datetime
    next_expected_at: datetime

    @classmethod
    def from_domain(cls, forecast: RecurringBillForecast) -> "RecurringBillSchema":
        return cls(
            counterparty_label=forecast.counterparty_label,
            typical_amount=float(forecast.typical_amount),
            cadence=forecast.cadence.value,
            last_observed_at=forecast.last_observed_at,
            next_expected_at=forecast.next_expected_at,
        )


class RecurringBillsResponse(BaseModel):
    """Response for POST /v1/analytics/recurring"""

    bills: List[RecurringBillSchema]


class VelocityRequest(TransactionsRequest):
    """Request body for POST /v1/analytics/velocity"""

    monthly_budget: Optional[Decimal] = Field(None, ge=0, description="Defaults to configured budget")
    current_balance: Decimal


class VelocityResponse(BaseModel):
    """Response for POST /v1/analytics/velocity"""

    daily_burn_rate: float
    velocity_ratio: Optional[float] = None
    status: str
    projected_end_balance: float
    days_in_month: int
    days_remaining: int
    monthly_expenses: float
    expected_spend_to_date: float

    @classmethod
    def from_domain(cls, report: SpendingVelocityReport) -> "VelocityResponse":
        return cls(
            daily_burn_rate=float(report.daily_burn_rate),
            velocity_ratio=float(report.velocity_ratio) if report.velocity_ratio is not None else None,
            status=report.status.value,
            projected_end_balance=float(report.projected_end_balance),
            days_in_month=report.days_in_month,
            days_remaining=report.days_remaining,
            monthly_expenses=float(report.monthly_expenses),
            expected_spend_to_date=float(report.expected_spend_to_date),
        )


class CategorySchema(BaseModel):
    """Spending category with monthly limit"""

    id: str = Field(..., min_length=1)
    name: str
    color: str = "#6b7280"
    budget_limit: Decimal = Field(Decimal("0"), ge=0)

    @classmethod
    def from_domain(cls, category: Category) -> "CategorySchema":
        return cls(id=category.id, name=category.name, color=category.color, budget_limit=category.budget_limit)

    def to_domain(self) -> Category:
        return Category(id=self.id, name=self.name, color=self.color, budget_limit=self.budget_limit)


class CategoriesResponse(BaseModel):
    """Response for GET /v1/categories"""

    categories: List[CategorySchema]


class SummaryRequest(TransactionsRequest):
    """Request body for POST /v1/analytics/summary"""

    categories: Optional[List[CategorySchema]] = None


class CashflowSchema(BaseModel):
    income: float
    expense: float
    net: float
    transaction_count: int

    @classmethod
    def from_domain(cls, summary: CashflowSummary) -> "CashflowSchema":
        return cls(
            income=float(summary.income),
            expense=float(summary.expense),
            net=float(summary.net),
            transaction_count=summary.transaction_count,
        )


class DailyCashflowSchema(BaseModel):
    day: date
    income: float
    expense: float

    @classmethod
    def from_domain(cls, entry: DailyCashflow) -> "DailyCashflowSchema":
        return cls(day=entry.day, income=float(entry.income), expense=float(entry.expense))


class CategorySpendSchema(BaseModel):
    category_id: str
    name: str
    color: str
    amount: float
    budget_limit: float
    utilization: Optional[float] = None

    @classmethod
    def from_domain(cls, spend: CategorySpend) -> "CategorySpendSchema":
        return cls(
            category_id=spend.category_id,
            name=spend.name,
            color=spend.color,
            amount=float(spend.amount),
            budget_limit=float(spend.budget_limit),
            utilization=float(spend.utilization) if spend.utilization is not None else None,
        )


class SummaryResponse(BaseModel):
    """Response for POST /v1/analytics/summary"""

    cashflow: CashflowSchema
    daily: List[DailyCashflowSchema]
    categories: List[CategorySpendSchema]
