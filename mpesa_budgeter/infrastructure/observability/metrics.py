"""Prometheus metrics for parse rates, detected bills and spending velocity"""

from prometheus_client import Counter, Histogram

from mpesa_budgeter.domain.models import TransactionRecord

# Parser metrics
messages_parsed_counter = Counter(
    "mpesa_messages_parsed_total",
    "Messages submitted for parsing",
    ["outcome"],  # recognized | unrecognized | duplicate
)

transactions_by_kind_counter = Counter(
    "mpesa_transactions_by_kind_total",
    "Recognized transactions by kind",
    ["kind"],
)

# Analytics metrics
recurring_bills_histogram = Histogram(
    "mpesa_recurring_bills_detected",
    "Recurring bill forecasts produced per detection run",
    buckets=[0, 1, 2, 5, 10, 20, 50],
)

velocity_status_counter = Counter(
    "mpesa_velocity_status_total",
    "Spending velocity reports by status",
    ["status"],  # over | under | on-track
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_parsed(record: TransactionRecord) -> None:
    messages_parsed_counter.labels(outcome="recognized").inc()
    transactions_by_kind_counter.labels(kind=record.kind.value).inc()


def record_unrecognized(count: int = 1) -> None:
    messages_parsed_counter.labels(outcome="unrecognized").inc(count)


def record_duplicates(count: int) -> None:
    messages_parsed_counter.labels(outcome="duplicate").inc(count)
