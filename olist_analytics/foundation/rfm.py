"""RFM (Recency-Frequency-Monetary) scoring.

RFM analysis segments customers based on three dimensions:
- Recency: How recently did the customer make a purchase?
- Frequency: How often do they purchase?
- Monetary: How much do they spend?

Recency and monetary are scored relatively: customers are ranked against
each other and split into five equally sized groups (SQL ``NTILE(5)``).
Frequency is scored against fixed loyalty thresholds instead. Most Olist
customers buy exactly once, so rank-based bins would push one-time buyers
into the upper scores just to fill them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Sequence

from olist_analytics.foundation.customer_metrics import CustomerMetrics

NUM_BUCKETS = 5
MIN_SCORE = 1
MAX_SCORE = NUM_BUCKETS

# Minimum order count for each frequency score, highest first.
FREQUENCY_THRESHOLDS = (
    (5, 5),  # Super loyal
    (4, 4),  # Very loyal
    (3, 3),  # Returning
    (2, 2),  # Repeat buyer
)


@dataclass(frozen=True)
class ScoredCustomer:
    """Customer metrics with their RFM scores.

    Attributes
    ----------
    customer_unique_id:
        Real-world customer identifier
    last_purchase_date:
        Most recent delivered purchase
    frequency:
        Distinct delivered orders
    monetary:
        Total amount paid
    r_score:
        Recency score (1-5, where 5 = most recent)
    f_score:
        Frequency score (1-5, fixed thresholds)
    m_score:
        Monetary score (1-5, where 5 = highest spend)
    rfm_segment:
        Combined segment code (e.g., "555" for best customers)
    """

    customer_unique_id: str
    last_purchase_date: datetime
    frequency: int
    monetary: Decimal
    r_score: int
    f_score: int
    m_score: int
    rfm_segment: str

    def __post_init__(self) -> None:
        """Validate RFM scores."""
        for score_name, score_value in [
            ("r_score", self.r_score),
            ("f_score", self.f_score),
            ("m_score", self.m_score),
        ]:
            if not MIN_SCORE <= score_value <= MAX_SCORE:
                raise ValueError(
                    f"{score_name} must be between {MIN_SCORE} and {MAX_SCORE}: {score_value} (customer_unique_id={self.customer_unique_id})"
                )
        expected = compose_segment(self.r_score, self.f_score, self.m_score)
        if self.rfm_segment != expected:
            raise ValueError(
                f"rfm_segment ({self.rfm_segment}) does not match r/f/m scores ({expected}) (customer_unique_id={self.customer_unique_id})"
            )


def ntile(count: int, num_buckets: int = NUM_BUCKETS) -> list[int]:
    """Return NTILE bucket numbers for ``count`` rows already in rank order.

    Rows are split into ``num_buckets`` groups whose sizes differ by at most
    one; the first ``count % num_buckets`` groups get the extra row. With
    fewer rows than buckets only buckets ``1..count`` are used.

    >>> ntile(7)
    [1, 1, 2, 2, 3, 4, 5]
    >>> ntile(3)
    [1, 2, 3]
    """
    if num_buckets <= 0:
        raise ValueError(f"num_buckets must be positive: {num_buckets}")
    if count <= 0:
        return []

    base, remainder = divmod(count, num_buckets)
    large_rows = remainder * (base + 1)
    buckets: list[int] = []
    for rank in range(count):
        if rank < large_rows:
            buckets.append(rank // (base + 1) + 1)
        else:
            buckets.append((rank - large_rows) // base + remainder + 1)
    return buckets


def relative_scores(
    metrics: Sequence[CustomerMetrics],
    key: Callable[[CustomerMetrics], Any],
    num_buckets: int = NUM_BUCKETS,
) -> dict[str, int]:
    """Score customers by rank of ``key`` ascending.

    Ties on ``key`` are ordered by customer_unique_id so reruns over the same
    data give the same scores. Tied customers can still land in different
    buckets when a boundary falls between them.

    Returns
    -------
    dict[str, int]
        Mapping of customer_unique_id to bucket (1 = lowest key)

    Raises
    ------
    ValueError
        If a customer_unique_id appears more than once
    """
    ranked = sorted(metrics, key=lambda m: (key(m), m.customer_unique_id))
    buckets = ntile(len(ranked), num_buckets)
    scores: dict[str, int] = {}
    for m, bucket in zip(ranked, buckets):
        if m.customer_unique_id in scores:
            raise ValueError(
                f"Duplicate customer_unique_id in metrics: {m.customer_unique_id}"
            )
        scores[m.customer_unique_id] = bucket
    return scores


def frequency_score(frequency: int) -> int:
    """Map an order count to a loyalty score using fixed thresholds.

    >>> [frequency_score(f) for f in (1, 2, 3, 4, 5, 12)]
    [1, 2, 3, 4, 5, 5]
    """
    for min_orders, score in FREQUENCY_THRESHOLDS:
        if frequency >= min_orders:
            return score
    return MIN_SCORE


def compose_segment(r_score: int, f_score: int, m_score: int) -> str:
    """Concatenate R, F and M scores into a segment code such as ``"555"``."""
    return f"{r_score}{f_score}{m_score}"


def parse_segment(rfm_segment: str) -> tuple[int, int, int]:
    """Split a segment code back into ``(r_score, f_score, m_score)``.

    Raises
    ------
    ValueError
        If the code is not three digits in the 1-5 range
    """
    if len(rfm_segment) != 3 or not rfm_segment.isdigit():
        raise ValueError(f"Segment code must be three digits: {rfm_segment!r}")
    r_score, f_score, m_score = (int(ch) for ch in rfm_segment)
    for score in (r_score, f_score, m_score):
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise ValueError(
                f"Segment code digits must be between {MIN_SCORE} and {MAX_SCORE}: {rfm_segment!r}"
            )
    return r_score, f_score, m_score


def score_customers(metrics: Sequence[CustomerMetrics]) -> list[ScoredCustomer]:
    """Assign R, F and M scores to every customer.

    Recency and monetary scores depend on the whole population passed in, so
    adding or removing customers can shift them. Frequency scores depend on
    the customer's own order count only.

    Parameters
    ----------
    metrics:
        Aggregated metrics, one per customer

    Returns
    -------
    list[ScoredCustomer]
        Scored customers sorted by customer_unique_id

    Examples
    --------
    >>> from datetime import datetime
    >>> from decimal import Decimal
    >>> metrics = [
    ...     CustomerMetrics("U1", datetime(2018, 8, 1), 5, Decimal("900.00")),
    ...     CustomerMetrics("U2", datetime(2017, 2, 1), 1, Decimal("20.00")),
    ... ]
    >>> [s.rfm_segment for s in score_customers(metrics)]
    ['252', '111']
    """
    if not metrics:
        return []

    r_scores = relative_scores(metrics, key=lambda m: m.last_purchase_date)
    m_scores = relative_scores(metrics, key=lambda m: m.monetary)

    scored: list[ScoredCustomer] = []
    for m in metrics:
        r_score = r_scores[m.customer_unique_id]
        f_score = frequency_score(m.frequency)
        m_score = m_scores[m.customer_unique_id]
        scored.append(
            ScoredCustomer(
                customer_unique_id=m.customer_unique_id,
                last_purchase_date=m.last_purchase_date,
                frequency=m.frequency,
                monetary=m.monetary,
                r_score=r_score,
                f_score=f_score,
                m_score=m_score,
                rfm_segment=compose_segment(r_score, f_score, m_score),
            )
        )

    scored.sort(key=lambda s: s.customer_unique_id)
    return scored
