"""Unit tests for confirmation message parsing"""

import pytest
from datetime import datetime
from decimal import Decimal
from mpesa_budgeter.domain.models import TransactionKind
from mpesa_budgeter.domain.parser import (
    extract_timestamp,
    parse_transaction_message,
    require_transaction_message,
)
from mpesa_budgeter.domain.exceptions import UnrecognizedMessageError


def test_parse_full_paybill_message(sample_paybill: str, now: datetime):
    """Test every field of a complete paybill confirmation"""
    record = parse_transaction_message(sample_paybill, now)

    assert record is not None
    assert record.external_id == "L739H12345"
    assert record.amount == Decimal("1200.00")
    assert record.fee == Decimal("15.00")
    assert record.balance_after == Decimal("5432.10")
    assert record.kind == TransactionKind.PAYBILL
    assert record.counterparty == "SAFARICOM HOUSE"
    assert record.occurred_at == datetime(2026, 2, 19, 18, 55)
    assert record.source_text == sample_paybill
    assert record.category_id is None


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Hello, your package is ready",
        "Confirmed. Ksh100.00 sent to JOHN on 1/2/26 at 9:00 AM.",
        "  L739H12345 Confirmed. Ksh100.00 paid to KPLC. on 1/2/26 at 9:00 AM.",
        "L739H12345 Pending. Ksh10.00 paid to KPLC. on 1/2/26 at 9:00 AM.",
        "Failed. L739H12345 Confirmed.",
    ],
)
def test_parse_rejects_text_without_anchor(text: str, now: datetime):
    """Test anchor check is the single hard failure"""
    assert parse_transaction_message(text, now) is None


def test_parse_anchor_case_insensitive(now: datetime):
    record = parse_transaction_message("qw12er34 CONFIRMED. Ksh50.00 sent to MARY on 3/1/26 at 7:05 AM", now)

    assert record is not None
    assert record.external_id == "qw12er34"


def test_parse_sent_message(now: datetime):
    text = (
        "QAB1CD2EF3 Confirmed. Ksh2,500.00 sent to JANE WANJIKU 0712345678 on 5/3/2026 at 10:15 AM. "
        "New M-PESA balance is Ksh10,000.00. Transaction cost, Ksh33.00."
    )
    record = parse_transaction_message(text, now)

    assert record.kind == TransactionKind.SEND
    assert record.counterparty == "JANE WANJIKU 0712345678"
    assert record.amount == Decimal("2500.00")
    assert record.fee == Decimal("33.00")
    assert record.occurred_at == datetime(2026, 3, 5, 10, 15)


def test_parse_received_message(now: datetime):
    text = (
        "RBC7XY8Z90 Confirmed. You have received Ksh3,000.00 from PETER OTIENO 0722000111 "
        "on 1/3/26 at 12:30 PM New M-PESA balance is Ksh13,000.00."
    )
    record = parse_transaction_message(text, now)

    assert record.kind == TransactionKind.RECEIVE
    assert record.counterparty == "PETER OTIENO 0722000111"
    assert record.balance_after == Decimal("13000.00")
    assert record.fee == Decimal("0")
    assert record.occurred_at == datetime(2026, 3, 1, 12, 30)


def test_parse_withdraw_message(now: datetime):
    text = (
        "SDE4FG5HI6 Confirmed.on 2/3/26 at 12:10 AM Withdraw Ksh1,000.00 from 123456 - MAMA MBOGA SHOP "
        "on 2/3/26 at 12:10 AM New M-PESA balance is Ksh900.00. Transaction cost, Ksh29.00."
    )
    record = parse_transaction_message(text, now)

    assert record.kind == TransactionKind.WITHDRAW
    assert record.counterparty == "123456 - MAMA MBOGA SHOP"
    assert record.occurred_at == datetime(2026, 3, 2, 0, 10)


def test_parse_buy_goods_message(now: datetime):
    text = "TUV1WX2YZ3 Confirmed. Buy Goods Ksh450.00 to NAIVAS SUPERMARKET on 4/3/26 at 6:00 PM."
    record = parse_transaction_message(text, now)

    assert record.kind == TransactionKind.BUYGOODS
    assert record.counterparty == "NAIVAS SUPERMARKET"
    assert record.amount == Decimal("450.00")


def test_parse_marker_priority_first_match_wins(now: datetime):
    """'paid to' outranks 'sent to' even when both appear"""
    text = "ABC123 Confirmed. Ksh10.00 paid to SHOP. on 1/1/26 at 1:00 PM. Earlier you sent to FRIEND on 1/1/26"
    record = parse_transaction_message(text, now)

    assert record.kind == TransactionKind.PAYBILL
    assert record.counterparty == "SHOP"


@pytest.mark.parametrize(
    "text, kind, placeholder",
    [
        ("A1 Confirmed. Ksh10.00 paid to KPLC", TransactionKind.PAYBILL, "Unknown Merchant"),
        ("A1 Confirmed. Ksh10.00 sent to", TransactionKind.SEND, "Unknown Recipient"),
        ("A1 Confirmed. You have received Ksh10.00", TransactionKind.RECEIVE, "Unknown Sender"),
        ("A1 Confirmed. Withdraw Ksh10.00", TransactionKind.WITHDRAW, "Agent"),
        ("A1 Confirmed. Buy Goods Ksh10.00", TransactionKind.BUYGOODS, "Merchant"),
    ],
)
def test_parse_counterparty_placeholders(text: str, kind: TransactionKind, placeholder: str, now: datetime):
    record = parse_transaction_message(text, now)

    assert record.kind == kind
    assert record.counterparty == placeholder


def test_parse_unknown_shape_defaults(now: datetime):
    """Test graceful degradation: no amount, no date, no marker"""
    record = parse_transaction_message("ZZ9 Confirmed. Reversal of transaction pending.", now)

    assert record is not None
    assert record.kind == TransactionKind.OTHER
    assert record.counterparty == "Unknown"
    assert record.amount == Decimal("0")
    assert record.balance_after == Decimal("0")
    assert record.fee == Decimal("0")
    assert record.occurred_at == now


def test_parse_is_idempotent(sample_paybill: str, now: datetime):
    assert parse_transaction_message(sample_paybill, now) == parse_transaction_message(sample_paybill, now)


@pytest.mark.parametrize(
    "clause, expected",
    [
        ("on 19/2/26 at 12:05 AM", datetime(2026, 2, 19, 0, 5)),
        ("on 19/2/26 at 12:05 PM", datetime(2026, 2, 19, 12, 5)),
        ("on 19/2/26 at 11:59 PM", datetime(2026, 2, 19, 23, 59)),
        ("on 19/2/26 at 1:00 am", datetime(2026, 2, 19, 1, 0)),
        ("on 7/11/2025 at 3:30 PM", datetime(2025, 11, 7, 15, 30)),
    ],
)
def test_extract_timestamp_clock_conversion(clause: str, expected: datetime, now: datetime):
    assert extract_timestamp(f"X1 Confirmed. {clause}.", now) == expected


def test_extract_timestamp_impossible_date_falls_back(now: datetime):
    assert extract_timestamp("X1 Confirmed. on 31/2/26 at 1:00 PM", now) == now


def test_require_transaction_message_raises():
    with pytest.raises(UnrecognizedMessageError):
        require_transaction_message("not a confirmation")
