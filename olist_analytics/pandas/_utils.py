"""Shared utilities for pandas conversion operations."""

from decimal import Decimal

import pandas as pd  # type: ignore


def decimal_to_float(value: Decimal) -> float:
    """Convert Decimal to float for pandas compatibility."""
    return float(value)


def float_to_decimal(value: float) -> Decimal:
    """Convert float to Decimal, avoiding precision issues.

    Warning:
        Floats with >15 significant digits may lose precision due to
        float representation limits. For financial calculations requiring
        exact precision, use Decimal inputs from the start.

    Args:
        value: Float value to convert

    Returns:
        Decimal representation of the float

    Raises:
        TypeError: If value is not numeric

    Example:
        >>> float_to_decimal(123.45)
        Decimal('123.45')
    """
    if not isinstance(value, (int, float)):
        raise TypeError(f"Expected numeric type, got {type(value)}")
    return Decimal(str(value))


def require_columns(df: pd.DataFrame, columns: list[str], table: str) -> None:
    """Raise ValueError if ``df`` lacks columns or has nulls in them."""
    missing_cols = set(columns) - set(df.columns)
    if missing_cols:
        raise ValueError(f"{table} DataFrame missing required columns: {missing_cols}")

    if df.empty:
        return

    null_cols = df[columns].isnull().any()
    if null_cols.any():
        null_col_names = null_cols[null_cols].index.tolist()
        raise ValueError(
            f"Null/NaN values found in {table} columns: {null_col_names}. "
            "RFM calculations require complete data."
        )
