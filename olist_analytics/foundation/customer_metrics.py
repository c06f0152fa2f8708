"""Customer-level aggregation of delivered Olist orders."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from olist_analytics.foundation.records import (
    DELIVERED_STATUS,
    CustomerRecord,
    OrderRecord,
    PaymentRecord,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class CustomerMetrics:
    """Raw RFM inputs for a single real-world customer.

    Attributes
    ----------
    customer_unique_id:
        Real-world customer identifier (may span several accounts)
    last_purchase_date:
        Purchase timestamp of the customer's most recent delivered order
    frequency:
        Number of distinct delivered orders
    monetary:
        Total amount paid across every payment line of those orders
    """

    customer_unique_id: str
    last_purchase_date: datetime
    frequency: int
    monetary: Decimal

    def __post_init__(self) -> None:
        """Validate customer metrics."""
        if self.frequency <= 0:
            raise ValueError(
                f"Frequency must be positive: {self.frequency} (customer_unique_id={self.customer_unique_id})"
            )
        if self.monetary < 0:
            raise ValueError(
                f"Monetary value cannot be negative: {self.monetary} (customer_unique_id={self.customer_unique_id})"
            )


def aggregate_customer_metrics(
    customers: Iterable[CustomerRecord],
    orders: Iterable[OrderRecord],
    payments: Iterable[PaymentRecord],
    *,
    delivered_status: str = DELIVERED_STATUS,
) -> list[CustomerMetrics]:
    """Reduce customer, order and payment rows to one row per customer.

    Rows are combined with inner-join semantics: customer -> order on
    ``customer_id`` and order -> payment on ``order_id``, keeping only orders
    whose status equals ``delivered_status``. Rows without a partner on the
    other side of a join are dropped silently. A delivered order with no
    payment line therefore does not count towards frequency.

    Monetary is the sum of every matched payment line, so an order paid in
    three instalments contributes all three values.

    Parameters
    ----------
    customers:
        Customer rows mapping account ids to ``customer_unique_id``
    orders:
        Order rows (any status)
    payments:
        Payment lines (one or more per order)
    delivered_status:
        Order status that qualifies an order (default: ``"delivered"``)

    Returns
    -------
    list[CustomerMetrics]
        One entry per customer with at least one paid delivered order,
        sorted by customer_unique_id

    Examples
    --------
    >>> from datetime import datetime
    >>> from decimal import Decimal
    >>> metrics = aggregate_customer_metrics(
    ...     [CustomerRecord("acc-1", "U1")],
    ...     [OrderRecord("O1", "acc-1", "delivered", datetime(2018, 1, 5))],
    ...     [
    ...         PaymentRecord("O1", Decimal("10.00")),
    ...         PaymentRecord("O1", Decimal("5.50")),
    ...     ],
    ... )
    >>> metrics[0].frequency, metrics[0].monetary
    (1, Decimal('15.50'))
    """
    unique_id_by_account = {c.customer_id: c.customer_unique_id for c in customers}

    delivered: dict[str, OrderRecord] = {}
    skipped_orders = 0
    for order in orders:
        if order.order_status != delivered_status:
            continue
        if order.customer_id not in unique_id_by_account:
            skipped_orders += 1
            continue
        delivered[order.order_id] = order

    paid_by_order: dict[str, Decimal] = {}
    skipped_payments = 0
    for payment in payments:
        if payment.order_id not in delivered:
            skipped_payments += 1
            continue
        paid_by_order[payment.order_id] = (
            paid_by_order.get(payment.order_id, Decimal("0")) + payment.payment_value
        )

    grouped: dict[str, dict[str, object]] = {}
    for order_id, paid in paid_by_order.items():
        order = delivered[order_id]
        unique_id = unique_id_by_account[order.customer_id]
        bucket = grouped.setdefault(
            unique_id,
            {
                "last_purchase_date": order.order_purchase_timestamp,
                "order_ids": set(),
                "monetary": Decimal("0"),
            },
        )
        bucket["last_purchase_date"] = max(
            bucket["last_purchase_date"], order.order_purchase_timestamp
        )
        bucket["order_ids"].add(order_id)
        bucket["monetary"] += paid

    logger.debug(
        "Aggregated %d customers from %d paid delivered orders "
        "(skipped %d orphan orders, %d unmatched payment lines)",
        len(grouped),
        len(paid_by_order),
        skipped_orders,
        skipped_payments,
    )

    metrics = [
        CustomerMetrics(
            customer_unique_id=unique_id,
            last_purchase_date=payload["last_purchase_date"],
            frequency=len(payload["order_ids"]),
            monetary=payload["monetary"].quantize(CENTS, rounding=ROUND_HALF_UP),
        )
        for unique_id, payload in grouped.items()
    ]
    metrics.sort(key=lambda m: m.customer_unique_id)
    return metrics
