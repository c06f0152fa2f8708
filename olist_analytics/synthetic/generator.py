from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
import math
from pathlib import Path
import random
from typing import List, Optional

import pandas as pd

from olist_analytics.foundation.records import (
    DELIVERED_STATUS,
    CustomerRecord,
    OrderRecord,
    PaymentRecord,
)
from olist_analytics.loaders import OlistTables

NON_DELIVERED_STATUSES = (
    "shipped",
    "canceled",
    "unavailable",
    "invoiced",
    "processing",
)


@dataclass(frozen=True)
class OlistScenarioConfig:
    """Configuration for the synthetic Olist generator.

    Attributes
    ----------
    repeat_probability: Chance that a customer places one more order; drives
        the long tail of one-time buyers.
    max_orders: Upper bound on orders per customer.
    delivered_share: Share of orders that reach "delivered".
    mean_order_value: Average total paid per order.
    value_variability: Coefficient in (0, 1] controlling order value spread.
    split_payment_probability: Chance an order is paid in several lines.
    unpaid_order_probability: Chance an order has no payment line at all.
    seed: Optional RNG seed for reproducibility.
    """

    repeat_probability: float = 0.08
    max_orders: int = 8
    delivered_share: float = 0.97
    mean_order_value: float = 160.0
    value_variability: float = 0.6
    split_payment_probability: float = 0.05
    unpaid_order_probability: float = 0.001
    seed: Optional[int] = None


def _sample_value(rng: random.Random, mean: float, variability: float) -> Decimal:
    variability = min(max(variability, 0.01), 1.0)
    # Log-normal-ish by exponentiating a normal draw for positivity
    sigma = variability
    mu = math.log(max(mean, 0.01)) - 0.5 * sigma * sigma
    value = math.exp(rng.normalvariate(mu, sigma))
    return Decimal(str(round(max(value, 0.01), 2)))


def _split_payment(rng: random.Random, total: Decimal, lines: int) -> List[Decimal]:
    parts: List[Decimal] = []
    remaining = total
    for _ in range(lines - 1):
        part = (remaining * Decimal(str(round(rng.uniform(0.1, 0.6), 2)))).quantize(
            Decimal("0.01")
        )
        parts.append(part)
        remaining -= part
    parts.append(remaining)
    return parts


def generate_olist_dataset(
    n_customers: int,
    start: date,
    end: date,
    *,
    scenario: Optional[OlistScenarioConfig] = None,
) -> OlistTables:
    """Generate Olist-shaped customers, orders and payments.

    Like the real dataset, every order is placed from a fresh account
    (``customer_id``) that maps back to the customer's
    ``customer_unique_id``. Order counts follow a geometric long tail, a
    small share of orders never reaches "delivered", some orders are paid in
    several lines and a few have no payment line.
    """

    if n_customers <= 0:
        return OlistTables(customers=[], orders=[], payments=[])
    if start > end:
        raise ValueError("start date must be <= end date")

    scenario = scenario or OlistScenarioConfig()
    rng = random.Random(scenario.seed)
    total_seconds = int((end - start).total_seconds() + 86400) - 1
    base = datetime(start.year, start.month, start.day)

    customers: List[CustomerRecord] = []
    orders: List[OrderRecord] = []
    payments: List[PaymentRecord] = []
    order_seq = 1

    for i in range(n_customers):
        unique_id = f"U-{i + 1}"
        num_orders = 1
        while (
            num_orders < scenario.max_orders
            and rng.random() < scenario.repeat_probability
        ):
            num_orders += 1

        for _ in range(num_orders):
            account_id = f"A-{order_seq}"
            order_id = f"O-{order_seq}"
            order_seq += 1
            customers.append(
                CustomerRecord(customer_id=account_id, customer_unique_id=unique_id)
            )

            status = (
                DELIVERED_STATUS
                if rng.random() < scenario.delivered_share
                else rng.choice(NON_DELIVERED_STATUSES)
            )
            orders.append(
                OrderRecord(
                    order_id=order_id,
                    customer_id=account_id,
                    order_status=status,
                    order_purchase_timestamp=base
                    + timedelta(seconds=rng.randrange(total_seconds)),
                )
            )

            if rng.random() < scenario.unpaid_order_probability:
                continue
            total = _sample_value(
                rng, scenario.mean_order_value, scenario.value_variability
            )
            lines = 1
            if rng.random() < scenario.split_payment_probability:
                lines = 2 + rng.randrange(3)
            for value in _split_payment(rng, total, lines):
                payments.append(PaymentRecord(order_id=order_id, payment_value=value))

    orders.sort(key=lambda o: (o.order_purchase_timestamp, o.order_id))
    return OlistTables(customers=customers, orders=orders, payments=payments)


def write_olist_csvs(tables: OlistTables, directory: Path) -> None:
    """Write ``tables`` as the three Olist CSV extracts under ``directory``."""

    directory.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(
        [
            {"customer_id": c.customer_id, "customer_unique_id": c.customer_unique_id}
            for c in tables.customers
        ],
        columns=["customer_id", "customer_unique_id"],
    ).to_csv(directory / "olist_customers_dataset.csv", index=False)
    pd.DataFrame(
        [
            {
                "order_id": o.order_id,
                "customer_id": o.customer_id,
                "order_status": o.order_status,
                "order_purchase_timestamp": o.order_purchase_timestamp.strftime(
                    "%Y-%m-%d %H:%M:%S"
                ),
            }
            for o in tables.orders
        ],
        columns=["order_id", "customer_id", "order_status", "order_purchase_timestamp"],
    ).to_csv(directory / "olist_orders_dataset.csv", index=False)
    pd.DataFrame(
        [
            {"order_id": p.order_id, "payment_value": float(p.payment_value)}
            for p in tables.payments
        ],
        columns=["order_id", "payment_value"],
    ).to_csv(directory / "olist_order_payments_dataset.csv", index=False)
