"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable
from fastapi.testclient import TestClient
from mpesa_budgeter.api.main import create_app
from mpesa_budgeter.api.dependencies import get_clock
from mpesa_budgeter.domain.models import TransactionKind, TransactionRecord
from mpesa_budgeter.utils.clock import FixedClock


# Mid-month so month-to-date windows are non-trivial
NOW = datetime(2026, 3, 10, 12, 0)

SAMPLE_PAYBILL = (
    "L739H12345 Confirmed. Ksh1,200.00 paid to SAFARICOM HOUSE. on 19/2/26 at 6:55 PM. "
    "New M-PESA balance is Ksh5,432.10. Transaction cost, Ksh15.00."
)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a fixed clock"""
    app = create_app()
    app.dependency_overrides[get_clock] = lambda: FixedClock(NOW)
    return TestClient(app)


@pytest.fixture
def make_record() -> Callable[..., TransactionRecord]:
    """Factory for transaction records with sensible defaults"""
    counter = {"n": 0}

    def _make(
        counterparty: str = "KPLC PREPAID",
        amount: str = "1000.00",
        occurred_at: datetime = NOW - timedelta(days=1),
        kind: TransactionKind = TransactionKind.PAYBILL,
        category_id: str | None = None,
    ) -> TransactionRecord:
        counter["n"] += 1
        return TransactionRecord(
            external_id=f"TX{counter['n']:06d}",
            amount=Decimal(amount),
            occurred_at=occurred_at,
            kind=kind,
            counterparty=counterparty,
            fee=Decimal("0"),
            balance_after=Decimal("0"),
            source_text=f"TX{counter['n']:06d} Confirmed.",
            category_id=category_id,
        )

    return _make


@pytest.fixture
def sample_paybill() -> str:
    return SAMPLE_PAYBILL
