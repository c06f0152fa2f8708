"""Frequency score distribution report.

Frequency scores use fixed thresholds, so their distribution is a direct
view of customer loyalty. For Olist a healthy report is dominated by
``f_score = 1`` with a share that shrinks towards ``f_score = 5``.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from olist_analytics.foundation.rfm import MAX_SCORE, MIN_SCORE, ScoredCustomer

# Standard percentage precision: 2 decimal places (e.g., 62.50%)
PERCENTAGE_PRECISION = Decimal("0.01")


@dataclass(frozen=True)
class FrequencyBucket:
    """Customer count and population share for one frequency score.

    Attributes
    ----------
    f_score:
        Frequency score (1-5)
    customer_count:
        Customers holding this score
    percentage:
        Share of the scored population, rounded to 2 decimal places
    """

    f_score: int
    customer_count: int
    percentage: Decimal

    def __post_init__(self) -> None:
        if not MIN_SCORE <= self.f_score <= MAX_SCORE:
            raise ValueError(f"f_score must be between 1 and 5: {self.f_score}")
        if self.customer_count < 0:
            raise ValueError(
                f"Customer count cannot be negative: {self.customer_count}"
            )
        if not 0 <= self.percentage <= 100:
            raise ValueError(f"Percentage must be 0-100: {self.percentage}")

    @property
    def percentage_label(self) -> str:
        return f"{self.percentage}%"


def frequency_distribution(scored: Sequence[ScoredCustomer]) -> list[FrequencyBucket]:
    """Count customers per frequency score.

    Only scores held by at least one customer are reported. An empty
    population yields an empty report.

    Parameters
    ----------
    scored:
        Scored customers for the whole population

    Returns
    -------
    list[FrequencyBucket]
        Buckets sorted by f_score descending

    Examples
    --------
    >>> from datetime import datetime
    >>> from decimal import Decimal
    >>> from olist_analytics.foundation.customer_metrics import CustomerMetrics
    >>> from olist_analytics.foundation.rfm import score_customers
    >>> metrics = [
    ...     CustomerMetrics(f"U{i}", datetime(2018, 1, 1), f, Decimal("10"))
    ...     for i, f in enumerate([1, 1, 1, 2])
    ... ]
    >>> [(b.f_score, b.customer_count, b.percentage_label)
    ...  for b in frequency_distribution(score_customers(metrics))]
    [(2, 1, '25.00%'), (1, 3, '75.00%')]
    """
    total = len(scored)
    if total == 0:
        return []

    counts = Counter(customer.f_score for customer in scored)
    buckets = [
        FrequencyBucket(
            f_score=f_score,
            customer_count=count,
            percentage=(Decimal(count) * 100 / Decimal(total)).quantize(
                PERCENTAGE_PRECISION, rounding=ROUND_HALF_UP
            ),
        )
        for f_score, count in counts.items()
    ]
    buckets.sort(key=lambda b: b.f_score, reverse=True)
    return buckets


def is_long_tail(buckets: Sequence[FrequencyBucket]) -> bool:
    """Check that the distribution looks like a one-time-buyer long tail.

    True when bucket 1 holds the largest share and the share never grows
    from a lower to a higher frequency score. Only reported buckets are
    compared, so an absent score does not break the tail. Returns False for
    an empty report or one without customers at ``f_score = 1``.
    """
    ordered = sorted(buckets, key=lambda b: b.f_score)
    if not ordered or ordered[0].f_score != MIN_SCORE:
        return False
    counts = [b.customer_count for b in ordered]
    if counts[0] != max(counts):
        return False
    return all(lower >= higher for lower, higher in zip(counts, counts[1:]))
