"""Source record definitions for the Olist e-commerce dataset.

The records capture the minimum fields every downstream scoring workflow
relies on. Olist issues a fresh ``customer_id`` per order account, so the
real-world customer is identified by ``customer_unique_id``; the customer
record is the bridge between the two.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

#: Order status that qualifies an order for customer scoring.
DELIVERED_STATUS = "delivered"


@dataclass(frozen=True, slots=True)
class CustomerRecord:
    """Row of ``olist_customers_dataset``.

    Attributes
    ----------
    customer_id:
        Account identifier referenced by orders.
    customer_unique_id:
        Identifier of the real-world customer. Several accounts may share it.
    """

    customer_id: str
    customer_unique_id: str

    def __post_init__(self) -> None:
        if not self.customer_id:
            raise ValueError("customer_id cannot be empty")
        if not self.customer_unique_id:
            raise ValueError(
                f"customer_unique_id cannot be empty (customer_id={self.customer_id})"
            )


@dataclass(frozen=True, slots=True)
class OrderRecord:
    """Row of ``olist_orders_dataset``."""

    order_id: str
    customer_id: str
    order_status: str
    order_purchase_timestamp: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.order_purchase_timestamp, datetime):
            raise TypeError(
                "order_purchase_timestamp must be a datetime instance",
                {"order_id": self.order_id, "value": self.order_purchase_timestamp},
            )


@dataclass(frozen=True, slots=True)
class PaymentRecord:
    """Row of ``olist_order_payments_dataset``.

    An order may carry several payment lines (vouchers, split cards), each
    recorded separately.
    """

    order_id: str
    payment_value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.payment_value, Decimal):
            raise TypeError(
                "payment_value must be a Decimal instance",
                {"order_id": self.order_id, "value": self.payment_value},
            )
        if self.payment_value < 0:
            raise ValueError(
                f"Payment value cannot be negative: {self.payment_value} (order_id={self.order_id})"
            )
