"""Batch ingestion of pasted or forwarded confirmation messages"""

from datetime import datetime
from typing import Iterable, Optional, Set

from mpesa_budgeter.domain.models import IngestionResult
from mpesa_budgeter.domain.parser import parse_transaction_message


def ingest_messages(texts: Iterable[str], now: Optional[datetime] = None) -> IngestionResult:
    """
    Parse messages in order.

    - Unrecognized texts are reported by their position in the input
    - A confirmation code seen earlier in the same batch is reported as a
      duplicate and its record is dropped
    """
    if now is None:
        now = datetime.now()

    result = IngestionResult()
    seen_ids: Set[str] = set()

    for index, text in enumerate(texts):
        record = parse_transaction_message(text, now)
        if record is None:
            result.unrecognized.append(index)
            continue

        if record.external_id in seen_ids:
            result.duplicates.append(record.external_id)
            continue

        seen_ids.add(record.external_id)
        result.records.append(record)

    return result
