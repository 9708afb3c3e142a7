"""POST /v1/messages/* - turn confirmation SMS text into transactions"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from mpesa_budgeter.api.v1.schemas import (
    BatchParseRequest,
    BatchParseResponse,
    ParseRequest,
    TransactionSchema,
)
from mpesa_budgeter.api.dependencies import get_clock, get_request_id
from mpesa_budgeter.config import settings
from mpesa_budgeter.domain.exceptions import UnrecognizedMessageError
from mpesa_budgeter.domain.ingestion import ingest_messages
from mpesa_budgeter.domain.parser import require_transaction_message
from mpesa_budgeter.infrastructure.observability.logging import log_parse_outcome
from mpesa_budgeter.infrastructure.observability.metrics import (
    record_duplicates,
    record_parsed,
    record_unrecognized,
)
from mpesa_budgeter.utils.clock import SystemClock

router = APIRouter()


@router.post("/messages/parse", response_model=TransactionSchema)
def parse_message(
    request_body: ParseRequest,
    request: Request,
    clock: SystemClock = Depends(get_clock),
):
    """
    Parse a single confirmation message.

    The caller persists the returned transaction; a repeated confirmation
    code is the caller's signal that the message was already stored.
    """
    request_id = get_request_id(request)

    try:
        record = require_transaction_message(request_body.text, clock.now())

        record_parsed(record)
        log_parse_outcome(request_id, recognized=True, external_id=record.external_id, kind=record.kind.value)

        return TransactionSchema.from_domain(record)

    except UnrecognizedMessageError as e:
        record_unrecognized()
        log_parse_outcome(request_id, recognized=False)
        raise HTTPException(status_code=422, detail="Message not recognized") from e

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/messages/batch", response_model=BatchParseResponse)
def parse_batch(
    request_body: BatchParseRequest,
    request: Request,
    clock: SystemClock = Depends(get_clock),
):
    """Parse many messages; unrecognized ones are reported by index"""
    request_id = get_request_id(request)

    if len(request_body.messages) > settings.max_batch_messages:
        raise HTTPException(
            status_code=422,
            detail=f"At most {settings.max_batch_messages} messages per batch",
        )

    try:
        result = ingest_messages(request_body.messages, clock.now())

        for record in result.records:
            record_parsed(record)
        record_unrecognized(len(result.unrecognized))
        record_duplicates(len(result.duplicates))

        logging.info(
            "Batch parsed",
            extra={
                "request_id": request_id,
                "step": "parse_batch",
                "recognized": len(result.records),
                "unrecognized": len(result.unrecognized),
                "duplicates": len(result.duplicates),
            },
        )

        return BatchParseResponse(
            transactions=[TransactionSchema.from_domain(r) for r in result.records],
            unrecognized=result.unrecognized,
            duplicates=result.duplicates,
        )

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
