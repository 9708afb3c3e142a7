"""POST /v1/analytics/* - budget analytics over caller-supplied history"""

import time
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request

from mpesa_budgeter.api.v1.schemas import (
    CashflowSchema,
    CategoriesResponse,
    CategorySchema,
    CategorySpendSchema,
    DailyCashflowSchema,
    RecurringBillSchema,
    RecurringBillsResponse,
    SummaryRequest,
    SummaryResponse,
    TransactionsRequest,
    VelocityRequest,
    VelocityResponse,
    to_domain_records,
)
from mpesa_budgeter.api.dependencies import get_clock, get_request_id
from mpesa_budgeter.config import settings
from mpesa_budgeter.domain.categories import DEFAULT_CATEGORIES
from mpesa_budgeter.domain.exceptions import InvalidTransactionDataError
from mpesa_budgeter.domain.models import TransactionRecord
from mpesa_budgeter.domain.recurring import detect_recurring_bills
from mpesa_budgeter.domain.summary import daily_cashflow, spending_by_category, summarize_cashflow
from mpesa_budgeter.domain.velocity import calculate_spending_velocity
from mpesa_budgeter.infrastructure.observability.logging import log_analytics
from mpesa_budgeter.infrastructure.observability.metrics import (
    recurring_bills_histogram,
    velocity_status_counter,
)
from mpesa_budgeter.utils.clock import SystemClock

router = APIRouter()


def _load_records(request_body: TransactionsRequest, request_id: str) -> List[TransactionRecord]:
    try:
        return to_domain_records(request_body.transactions)
    except InvalidTransactionDataError as e:
        logging.warning(f"Invalid transaction data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))


def _internal_error(e: Exception, request_id: str) -> HTTPException:
    logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
    return HTTPException(status_code=500, detail="Internal server error")


@router.post("/analytics/recurring", response_model=RecurringBillsResponse)
def recurring_bills(
    request_body: TransactionsRequest,
    request: Request,
    clock: SystemClock = Depends(get_clock),
):
    """Forecast bills that recur weekly, bi-weekly or monthly"""
    start_time = time.time()
    request_id = get_request_id(request)
    transactions = _load_records(request_body, request_id)

    try:
        forecasts = detect_recurring_bills(transactions, clock.now())

        recurring_bills_histogram.observe(len(forecasts))
        log_analytics(
            request_id,
            "recurring_bills",
            len(transactions),
            (time.time() - start_time) * 1000,
            forecast_count=len(forecasts),
        )

        return RecurringBillsResponse(bills=[RecurringBillSchema.from_domain(f) for f in forecasts])

    except Exception as e:
        raise _internal_error(e, request_id)


@router.post("/analytics/velocity", response_model=VelocityResponse)
def spending_velocity(
    request_body: VelocityRequest,
    request: Request,
    clock: SystemClock = Depends(get_clock),
):
    """
    Compare month-to-date spend against the budget.

    Uses the configured default budget when none is supplied.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    transactions = _load_records(request_body, request_id)

    monthly_budget = request_body.monthly_budget
    if monthly_budget is None:
        monthly_budget = settings.default_monthly_budget

    try:
        report = calculate_spending_velocity(
            transactions,
            monthly_budget,
            request_body.current_balance,
            clock.now(),
        )

        velocity_status_counter.labels(status=report.status.value).inc()
        log_analytics(
            request_id,
            "spending_velocity",
            len(transactions),
            (time.time() - start_time) * 1000,
            velocity_status=report.status.value,
        )

        return VelocityResponse.from_domain(report)

    except Exception as e:
        raise _internal_error(e, request_id)


@router.post("/analytics/summary", response_model=SummaryResponse)
def cashflow_summary(
    request_body: SummaryRequest,
    request: Request,
    clock: SystemClock = Depends(get_clock),
):
    """Totals, the recent daily series and per-category spend"""
    start_time = time.time()
    request_id = get_request_id(request)
    transactions = _load_records(request_body, request_id)

    categories = None
    if request_body.categories is not None:
        categories = [c.to_domain() for c in request_body.categories]

    try:
        summary = summarize_cashflow(transactions)
        daily = daily_cashflow(transactions, clock.now(), settings.cashflow_window_days)
        by_category = spending_by_category(transactions, categories)

        log_analytics(request_id, "cashflow_summary", len(transactions), (time.time() - start_time) * 1000)

        return SummaryResponse(
            cashflow=CashflowSchema.from_domain(summary),
            daily=[DailyCashflowSchema.from_domain(d) for d in daily],
            categories=[CategorySpendSchema.from_domain(s) for s in by_category],
        )

    except Exception as e:
        raise _internal_error(e, request_id)


@router.get("/categories", response_model=CategoriesResponse)
def list_categories():
    """Default categories with their monthly limits"""
    return CategoriesResponse(categories=[CategorySchema.from_domain(c) for c in DEFAULT_CATEGORIES])
