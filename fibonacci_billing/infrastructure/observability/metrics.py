"""Prometheus metrics for monitoring billing calculations and term distribution"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "fibonacci_billing_calculations_total",
    "Total billing cycles priced",
)

term_bucket_counter = Counter(
    "fibonacci_billing_terms_total",
    "Priced billing terms by length bucket",
    ["bucket"],  # 1m, 2-3m, 4-13m, 14m+
)

# Sequence cache metrics
sequence_extension_counter = Counter(
    "fibonacci_billing_sequence_extensions_total",
    "Terms appended to engine sequence caches",
)

# Schedule metrics
schedule_cycles_histogram = Histogram(
    "fibonacci_billing_schedule_cycles",
    "Number of cycles per generated billing schedule",
    buckets=[1, 3, 5, 10, 20, 50, 100],
)


def record_term(term_months: int) -> None:
    """Record the length bucket of a priced term"""
    if term_months <= 1:
        bucket = "1m"
    elif term_months <= 3:
        bucket = "2-3m"
    elif term_months <= 13:
        bucket = "4-13m"
    else:
        bucket = "14m+"

    term_bucket_counter.labels(bucket=bucket).inc()
