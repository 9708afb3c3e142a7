"""M-PESA confirmation message parser - raw SMS text to TransactionRecord"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from mpesa_budgeter.domain.exceptions import UnrecognizedMessageError
from mpesa_budgeter.domain.models import TransactionKind, TransactionRecord

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# "<code> Confirmed" must open the message
ANCHOR_PATTERN = re.compile(r"^([A-Z0-9]+)\sConfirmed", re.IGNORECASE)

_AMOUNT = r"Ksh\s?([\d,]+\.\d{2})"

AMOUNT_PATTERN = re.compile(_AMOUNT, re.IGNORECASE)
BALANCE_PATTERN = re.compile(r"balance is " + _AMOUNT, re.IGNORECASE)
FEE_PATTERN = re.compile(r"cost,\s?" + _AMOUNT, re.IGNORECASE)

TIMESTAMP_PATTERN = re.compile(
    r"on\s(\d{1,2})/(\d{1,2})/(\d{2,4})\sat\s(\d{1,2}):(\d{2})\s([AP]M)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class AmountRule:
    """Extracts one monetary field; the field is 0 when the pattern is absent"""

    field_name: str
    pattern: re.Pattern


AMOUNT_RULES: List[AmountRule] = [
    AmountRule("amount", AMOUNT_PATTERN),
    AmountRule("balance_after", BALANCE_PATTERN),
    AmountRule("fee", FEE_PATTERN),
]


@dataclass(frozen=True)
class KindMarker:
    """
    Literal phrase that classifies a message.

    The marker is matched case-sensitively against the raw text; the
    counterparty pattern runs only once its marker has won.
    """

    marker: str
    kind: TransactionKind
    counterparty_pattern: re.Pattern
    placeholder: str


# Evaluated top to bottom, first match wins
KIND_MARKERS: List[KindMarker] = [
    KindMarker(
        "paid to",
        TransactionKind.PAYBILL,
        re.compile(r"paid to\s(.*?)\.\son", re.IGNORECASE),
        "Unknown Merchant",
    ),
    KindMarker(
        "sent to",
        TransactionKind.SEND,
        re.compile(r"sent to\s(.*?)\son", re.IGNORECASE),
        "Unknown Recipient",
    ),
    KindMarker(
        "received Ksh",
        TransactionKind.RECEIVE,
        re.compile(r"from\s(.*?)\son", re.IGNORECASE),
        "Unknown Sender",
    ),
    KindMarker(
        "Withdraw",
        TransactionKind.WITHDRAW,
        re.compile(r"from\s(.*?)\son", re.IGNORECASE),
        "Agent",
    ),
    KindMarker(
        "Buy Goods",
        TransactionKind.BUYGOODS,
        re.compile(r"to\s(.*?)\son", re.IGNORECASE),
        "Merchant",
    ),
]

UNKNOWN_COUNTERPARTY = "Unknown"


def extract_amount(text: str, pattern: re.Pattern) -> Decimal:
    """First amount captured by pattern, thousands separators removed"""
    match = pattern.search(text)
    if not match:
        return ZERO
    return Decimal(match.group(1).replace(",", ""))


def extract_timestamp(text: str, now: datetime) -> datetime:
    """
    Read the 'on D/M/Y at H:MM AM|PM' clause.

    Day-first dates, two-digit years mean 20YY. Falls back to now when
    the clause is missing or names an impossible date/time.
    """
    match = TIMESTAMP_PATTERN.search(text)
    if not match:
        return now

    day, month, year, hours, minutes = (int(g) for g in match.groups()[:5])
    period = match.group(6).upper()

    if year < 100:
        year += 2000

    # 12-hour clock: 12 AM is midnight, PM below 12 shifts by 12
    if period == "PM" and hours < 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0

    try:
        return datetime(year, month, day, hours, minutes)
    except ValueError:
        logger.warning(
            "Impossible date clause, using current time",
            extra={"step": "parse_timestamp", "clause": match.group(0)},
        )
        return now


def classify(text: str) -> Tuple[TransactionKind, str]:
    """Determine kind and counterparty from the first matching marker"""
    for rule in KIND_MARKERS:
        if rule.marker not in text:
            continue
        match = rule.counterparty_pattern.search(text)
        name = match.group(1).strip() if match else ""
        return rule.kind, name or rule.placeholder

    return TransactionKind.OTHER, UNKNOWN_COUNTERPARTY


def parse_transaction_message(text: str, now: Optional[datetime] = None) -> Optional[TransactionRecord]:
    """
    Parse one confirmation message.

    Returns None when the '<code> Confirmed' anchor is missing. Every
    other field degrades to a default (0 amounts, current time,
    placeholder counterparty) so that a partial record is still produced;
    the original text is retained for manual correction.

    Args:
        text: Raw SMS body
        now: Moment used when the message carries no date clause
    """
    anchor = ANCHOR_PATTERN.match(text)
    if not anchor:
        return None

    if now is None:
        now = datetime.now()

    amounts = {rule.field_name: extract_amount(text, rule.pattern) for rule in AMOUNT_RULES}
    kind, counterparty = classify(text)

    return TransactionRecord(
        external_id=anchor.group(1),
        occurred_at=extract_timestamp(text, now),
        kind=kind,
        counterparty=counterparty,
        source_text=text,
        **amounts,
    )


def require_transaction_message(text: str, now: Optional[datetime] = None) -> TransactionRecord:
    """
    Strict variant of parse_transaction_message.

    Raises:
        UnrecognizedMessageError: If the confirmation anchor is missing
    """
    record = parse_transaction_message(text, now)
    if record is None:
        raise UnrecognizedMessageError("Message is not a recognized M-PESA confirmation")
    return record
