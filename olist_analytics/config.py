"""Run configuration for RFM segmentation."""

from pathlib import Path

from pydantic import BaseModel, Field

from olist_analytics.foundation.records import DELIVERED_STATUS


class ChampionCriteria(BaseModel):
    """Minimum scores a customer needs to be reported as a champion."""

    min_recency_score: int = Field(
        default=5, ge=1, le=5, description="Minimum recency score (5 = most recent)"
    )
    min_frequency_score: int = Field(
        default=4, ge=1, le=5, description="Minimum frequency score (4 = 4+ orders)"
    )
    min_monetary_score: int = Field(
        default=5, ge=1, le=5, description="Minimum monetary score (5 = top spenders)"
    )


class RFMRunConfig(BaseModel):
    """Configuration for a single RFM segmentation run."""

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory containing the Olist CSV extracts",
    )
    customers_file: str = Field(
        default="olist_customers_dataset.csv",
        description="Customer table file name inside data_dir",
    )
    orders_file: str = Field(
        default="olist_orders_dataset.csv",
        description="Order table file name inside data_dir",
    )
    payments_file: str = Field(
        default="olist_order_payments_dataset.csv",
        description="Order payment table file name inside data_dir",
    )
    delivered_status: str = Field(
        default=DELIVERED_STATUS,
        description="Order status that qualifies an order for scoring",
    )
    champions: ChampionCriteria = Field(
        default_factory=ChampionCriteria,
        description="Score thresholds for the champion list",
    )
    max_input_bytes: int = Field(
        default=512 * 1024 * 1024,
        gt=0,
        description="Per-file size cap to avoid accidental OOM",
    )

    def table_path(self, file_name: str) -> Path:
        return self.data_dir / file_name
