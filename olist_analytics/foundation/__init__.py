"""Foundational building blocks for Olist customer scoring.

This package exposes the source record definitions, the customer-level
aggregation of delivered orders and RFM (Recency-Frequency-Monetary)
scoring.
"""

from .customer_metrics import CustomerMetrics, aggregate_customer_metrics
from .records import DELIVERED_STATUS, CustomerRecord, OrderRecord, PaymentRecord
from .rfm import (
    ScoredCustomer,
    compose_segment,
    frequency_score,
    ntile,
    parse_segment,
    score_customers,
)

__all__ = [
    "DELIVERED_STATUS",
    "CustomerRecord",
    "OrderRecord",
    "PaymentRecord",
    "CustomerMetrics",
    "aggregate_customer_metrics",
    "ScoredCustomer",
    "compose_segment",
    "frequency_score",
    "ntile",
    "parse_segment",
    "score_customers",
]
