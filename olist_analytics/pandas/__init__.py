"""Pandas DataFrame adapters for Olist RFM scoring."""

from .rfm import (
    calculate_rfm_df,
    champions_to_dataframe,
    dataframes_to_records,
    distribution_to_dataframe,
    scored_to_dataframe,
    select_champions_df,
)

__all__ = [
    "calculate_rfm_df",
    "champions_to_dataframe",
    "dataframes_to_records",
    "distribution_to_dataframe",
    "scored_to_dataframe",
    "select_champions_df",
]
