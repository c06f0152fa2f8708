"""Loading of the Olist CSV extracts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from olist_analytics.config import RFMRunConfig
from olist_analytics.foundation.records import (
    CustomerRecord,
    OrderRecord,
    PaymentRecord,
)
from olist_analytics.pandas.rfm import dataframes_to_records

logger = logging.getLogger(__name__)

# Only the columns RFM scoring consumes are read from each table.
CUSTOMER_COLUMNS = ["customer_id", "customer_unique_id"]
ORDER_COLUMNS = ["order_id", "customer_id", "order_status", "order_purchase_timestamp"]
PAYMENT_COLUMNS = ["order_id", "payment_value"]


@dataclass
class OlistTables:
    """Source records for one run."""

    customers: list[CustomerRecord]
    orders: list[OrderRecord]
    payments: list[PaymentRecord]


def _read_table(path: Path, columns: list[str], max_bytes: int) -> pd.DataFrame:
    resolved = path.resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"Olist table not found: {resolved}")
    size = resolved.stat().st_size
    if size > max_bytes:
        raise ValueError(
            f"Input file {resolved} is {size} bytes; exceeds limit of {max_bytes} bytes"
        )

    header = pd.read_csv(resolved, nrows=0)
    missing_cols = set(columns) - set(header.columns)
    if missing_cols:
        raise ValueError(f"{resolved.name} missing required columns: {missing_cols}")

    # Identifiers are hex strings; keep them as text.
    dtypes = {
        col: str for col in columns if col.endswith("_id") or col == "order_status"
    }
    df = pd.read_csv(resolved, usecols=columns, dtype=dtypes)
    logger.info(f"Loaded {len(df)} rows from {resolved.name}")
    return df


def load_olist_frames(
    config: RFMRunConfig,
) -> tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """Read the customers, orders and payments CSVs into DataFrames."""
    customers_df = _read_table(
        config.table_path(config.customers_file),
        CUSTOMER_COLUMNS,
        config.max_input_bytes,
    )
    orders_df = _read_table(
        config.table_path(config.orders_file),
        ORDER_COLUMNS,
        config.max_input_bytes,
    )
    payments_df = _read_table(
        config.table_path(config.payments_file),
        PAYMENT_COLUMNS,
        config.max_input_bytes,
    )
    return customers_df, orders_df, payments_df


def load_olist_tables(config: RFMRunConfig) -> OlistTables:
    """Load the Olist extracts named by ``config`` as record objects.

    Raises
    ------
    FileNotFoundError
        If a table file does not exist
    ValueError
        If a file exceeds ``config.max_input_bytes``, lacks a required column
        or has nulls in one
    """
    customers, orders, payments = dataframes_to_records(*load_olist_frames(config))
    return OlistTables(customers=customers, orders=orders, payments=payments)
