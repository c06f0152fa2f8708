"""Pandas DataFrame adapters for RFM scoring."""

from typing import List, Optional, Sequence, Tuple

import pandas as pd  # type: ignore

from olist_analytics.analyses.champions import select_champions
from olist_analytics.analyses.distribution import FrequencyBucket
from olist_analytics.config import ChampionCriteria
from olist_analytics.foundation.customer_metrics import aggregate_customer_metrics
from olist_analytics.foundation.records import (
    DELIVERED_STATUS,
    CustomerRecord,
    OrderRecord,
    PaymentRecord,
)
from olist_analytics.foundation.rfm import ScoredCustomer, score_customers
from ._utils import decimal_to_float, float_to_decimal, require_columns

SCORED_COLUMNS = [
    "customer_unique_id",
    "last_purchase_date",
    "frequency",
    "monetary",
    "r_score",
    "f_score",
    "m_score",
    "rfm_segment",
]

CHAMPION_COLUMNS = [
    "customer_unique_id",
    "r_score",
    "f_score",
    "m_score",
    "rfm_segment",
]

DISTRIBUTION_COLUMNS = ["f_score", "customer_count", "percentage"]


def dataframes_to_records(
    customers_df: pd.DataFrame,
    orders_df: pd.DataFrame,
    payments_df: pd.DataFrame,
) -> Tuple[List[CustomerRecord], List[OrderRecord], List[PaymentRecord]]:
    """Convert the three Olist tables to record objects.

    Args:
        customers_df: Customers with customer_id, customer_unique_id
        orders_df: Orders with order_id, customer_id, order_status,
            order_purchase_timestamp (string or datetime64)
        payments_df: Payment lines with order_id, payment_value

    Returns:
        Tuple of (customers, orders, payments). Extra columns are ignored.

    Raises:
        ValueError: If a DataFrame is missing required columns or has nulls
            in them, or a timestamp cannot be parsed

    Example:
        >>> customers, orders, payments = dataframes_to_records(
        ...     pd.read_csv('olist_customers_dataset.csv'),
        ...     pd.read_csv('olist_orders_dataset.csv'),
        ...     pd.read_csv('olist_order_payments_dataset.csv'),
        ... )
    """
    require_columns(customers_df, ["customer_id", "customer_unique_id"], "customers")
    require_columns(
        orders_df,
        ["order_id", "customer_id", "order_status", "order_purchase_timestamp"],
        "orders",
    )
    require_columns(payments_df, ["order_id", "payment_value"], "payments")

    customers = [
        CustomerRecord(
            customer_id=str(record["customer_id"]),
            customer_unique_id=str(record["customer_unique_id"]),
        )
        for record in customers_df.to_dict("records")
    ]

    timestamps = pd.to_datetime(orders_df["order_purchase_timestamp"])
    orders = [
        OrderRecord(
            order_id=str(record["order_id"]),
            customer_id=str(record["customer_id"]),
            order_status=str(record["order_status"]),
            order_purchase_timestamp=ts.to_pydatetime(),
        )
        for record, ts in zip(orders_df.to_dict("records"), timestamps)
    ]

    payments = [
        PaymentRecord(
            order_id=str(record["order_id"]),
            payment_value=float_to_decimal(float(record["payment_value"])),
        )
        for record in payments_df.to_dict("records")
    ]

    return customers, orders, payments


def scored_to_dataframe(scored: Sequence[ScoredCustomer]) -> pd.DataFrame:
    """Convert scored customers to a DataFrame sorted by customer_unique_id."""
    if not scored:
        return pd.DataFrame(columns=SCORED_COLUMNS)

    rows = [
        {
            "customer_unique_id": s.customer_unique_id,
            "last_purchase_date": s.last_purchase_date,
            "frequency": s.frequency,
            "monetary": decimal_to_float(s.monetary),
            "r_score": s.r_score,
            "f_score": s.f_score,
            "m_score": s.m_score,
            "rfm_segment": s.rfm_segment,
        }
        for s in scored
    ]

    df = pd.DataFrame(rows, columns=SCORED_COLUMNS)
    return df.sort_values("customer_unique_id").reset_index(drop=True)


def champions_to_dataframe(champions: Sequence[ScoredCustomer]) -> pd.DataFrame:
    """Convert the champion list to its reporting columns.

    Row order of ``champions`` (monetary descending) is preserved.
    """
    rows = [
        {
            "customer_unique_id": c.customer_unique_id,
            "r_score": c.r_score,
            "f_score": c.f_score,
            "m_score": c.m_score,
            "rfm_segment": c.rfm_segment,
        }
        for c in champions
    ]
    return pd.DataFrame(rows, columns=CHAMPION_COLUMNS)


def distribution_to_dataframe(buckets: Sequence[FrequencyBucket]) -> pd.DataFrame:
    """Convert the frequency distribution to a DataFrame.

    The ``percentage`` column holds the rendered label (e.g. ``"62.50%"``).
    """
    rows = [
        {
            "f_score": b.f_score,
            "customer_count": b.customer_count,
            "percentage": b.percentage_label,
        }
        for b in buckets
    ]
    return pd.DataFrame(rows, columns=DISTRIBUTION_COLUMNS)


def calculate_rfm_df(
    customers_df: pd.DataFrame,
    orders_df: pd.DataFrame,
    payments_df: pd.DataFrame,
    delivered_status: str = DELIVERED_STATUS,
) -> pd.DataFrame:
    """Score customers straight from the three Olist DataFrames.

    Convenience function that combines conversion, aggregation and scoring.

    Example:
        >>> scores_df = calculate_rfm_df(customers_df, orders_df, payments_df)
        >>> scores_df[scores_df['rfm_segment'] == '555']
    """
    customers, orders, payments = dataframes_to_records(
        customers_df, orders_df, payments_df
    )
    metrics = aggregate_customer_metrics(
        customers, orders, payments, delivered_status=delivered_status
    )
    return scored_to_dataframe(score_customers(metrics))


def select_champions_df(
    scored_df: pd.DataFrame, criteria: Optional[ChampionCriteria] = None
) -> pd.DataFrame:
    """Champion list from a scored DataFrame produced by :func:`calculate_rfm_df`."""
    require_columns(scored_df, SCORED_COLUMNS, "scores")
    scored = [
        ScoredCustomer(
            customer_unique_id=str(record["customer_unique_id"]),
            last_purchase_date=pd.to_datetime(
                record["last_purchase_date"]
            ).to_pydatetime(),
            frequency=int(record["frequency"]),
            monetary=float_to_decimal(float(record["monetary"])),
            r_score=int(record["r_score"]),
            f_score=int(record["f_score"]),
            m_score=int(record["m_score"]),
            rfm_segment=str(record["rfm_segment"]),
        )
        for record in scored_df.to_dict("records")
    ]
    return champions_to_dataframe(select_champions(scored, criteria))
