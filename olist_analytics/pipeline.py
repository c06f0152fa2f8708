"""Run orchestration for RFM segmentation.

A run loads the Olist tables once, aggregates and scores customers once,
and serves both reporting views from the cached scores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import structlog

from olist_analytics.analyses.champions import select_champions
from olist_analytics.analyses.distribution import (
    FrequencyBucket,
    frequency_distribution,
    is_long_tail,
)
from olist_analytics.config import RFMRunConfig
from olist_analytics.foundation.customer_metrics import (
    CustomerMetrics,
    aggregate_customer_metrics,
)
from olist_analytics.foundation.records import (
    CustomerRecord,
    OrderRecord,
    PaymentRecord,
)
from olist_analytics.foundation.rfm import ScoredCustomer, score_customers
from olist_analytics.loaders import load_olist_tables

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RFMReport:
    """Results of one RFM segmentation run."""

    scored: list[ScoredCustomer]
    champions: list[ScoredCustomer]
    distribution: list[FrequencyBucket]

    @property
    def total_customers(self) -> int:
        return len(self.scored)

    @property
    def champion_count(self) -> int:
        return len(self.champions)

    @property
    def long_tail(self) -> bool:
        return is_long_tail(self.distribution)


class RFMRun:
    """Score a fixed set of source records and report on them.

    Metrics and scores are computed on first use and cached for the
    lifetime of the run; they are never persisted. Recomputing them from the
    same records gives identical results.
    """

    def __init__(
        self,
        customers: Sequence[CustomerRecord],
        orders: Sequence[OrderRecord],
        payments: Sequence[PaymentRecord],
        config: RFMRunConfig | None = None,
    ) -> None:
        self.customers = customers
        self.orders = orders
        self.payments = payments
        self.config = config or RFMRunConfig()
        self._metrics: list[CustomerMetrics] | None = None
        self._scored: list[ScoredCustomer] | None = None

    def metrics(self) -> list[CustomerMetrics]:
        if self._metrics is None:
            self._metrics = aggregate_customer_metrics(
                self.customers,
                self.orders,
                self.payments,
                delivered_status=self.config.delivered_status,
            )
            logger.info("customer_metrics_aggregated", customers=len(self._metrics))
        return self._metrics

    def scored(self) -> list[ScoredCustomer]:
        if self._scored is None:
            self._scored = score_customers(self.metrics())
            logger.info("customers_scored", customers=len(self._scored))
        return self._scored

    def champions(self) -> list[ScoredCustomer]:
        return select_champions(self.scored(), self.config.champions)

    def distribution(self) -> list[FrequencyBucket]:
        return frequency_distribution(self.scored())

    def report(self) -> RFMReport:
        report = RFMReport(
            scored=self.scored(),
            champions=self.champions(),
            distribution=self.distribution(),
        )
        if report.total_customers and not report.long_tail:
            logger.warning(
                "frequency_distribution_not_long_tail",
                distribution={b.f_score: b.customer_count for b in report.distribution},
            )
        logger.info(
            "rfm_report_ready",
            total_customers=report.total_customers,
            champion_count=report.champion_count,
            long_tail=report.long_tail,
        )
        return report


def run_rfm_analysis(config: RFMRunConfig) -> RFMReport:
    """Load the Olist tables named by ``config`` and produce an RFM report."""
    logger.info("rfm_run_started", data_dir=str(config.data_dir))
    tables = load_olist_tables(config)
    logger.info(
        "olist_tables_loaded",
        customers=len(tables.customers),
        orders=len(tables.orders),
        payments=len(tables.payments),
    )
    return RFMRun(tables.customers, tables.orders, tables.payments, config).report()
