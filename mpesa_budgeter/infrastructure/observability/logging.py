"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from mpesa_budgeter.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_parse_outcome(
    request_id: str,
    recognized: bool,
    external_id: Optional[str] = None,
    kind: Optional[str] = None,
) -> None:
    """Log whether a single message was recognized"""
    logging.info(
        "Message parsed" if recognized else "Message not recognized",
        extra={
            "request_id": request_id,
            "step": "parse_message",
            "outcome": "recognized" if recognized else "unrecognized",
            "external_id": external_id,
            "kind": kind,
        },
    )


def log_analytics(
    request_id: str,
    analysis: str,
    transaction_count: int,
    duration_ms: float,
    **fields: Any,
) -> None:
    """Log completion of an analytics run"""
    logging.info(
        "Analytics completed",
        extra={
            "request_id": request_id,
            "step": analysis,
            "transaction_count": transaction_count,
            "duration_ms": duration_ms,
            **fields,
        },
    )
