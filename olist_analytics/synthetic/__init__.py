"""Synthetic Olist-shaped data.

This package produces realistic-but-fake customers, orders and payments to
exercise the scoring pipeline without the public dataset at hand.
"""

from .generator import (
    NON_DELIVERED_STATUSES,
    OlistScenarioConfig,
    generate_olist_dataset,
    write_olist_csvs,
)

__all__ = [
    "NON_DELIVERED_STATUSES",
    "OlistScenarioConfig",
    "generate_olist_dataset",
    "write_olist_csvs",
]
