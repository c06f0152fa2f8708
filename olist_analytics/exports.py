"""Export RFM reports to CSV and JSON.

CSV files feed marketing tools (champion lists) and spreadsheets (full
scores); the JSON report is meant for dashboards and audit trails.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from olist_analytics.pandas.rfm import champions_to_dataframe, scored_to_dataframe
from olist_analytics.pipeline import RFMReport

logger = logging.getLogger(__name__)


def export_champions_csv(report: RFMReport, output_path: str | Path) -> None:
    """Write the champion list, highest spender first."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    champions_to_dataframe(report.champions).to_csv(output_path, index=False)
    logger.info(f"{report.champion_count} champions exported to {output_path}")


def export_scores_csv(report: RFMReport, output_path: str | Path) -> None:
    """Write every scored customer, sorted by customer_unique_id."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    scored_to_dataframe(report.scored).to_csv(output_path, index=False)
    logger.info(f"{report.total_customers} customer scores exported to {output_path}")


def report_to_dict(
    report: RFMReport, metadata: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Return a JSON-serialisable representation of the report."""
    return {
        "metadata": metadata or {},
        "timestamp": datetime.now().isoformat(),
        "total_customers": report.total_customers,
        "long_tail": report.long_tail,
        "frequency_distribution": [
            {
                "f_score": bucket.f_score,
                "customer_count": bucket.customer_count,
                "percentage": bucket.percentage_label,
            }
            for bucket in report.distribution
        ],
        "champions": [
            {
                "customer_unique_id": c.customer_unique_id,
                "r_score": c.r_score,
                "f_score": c.f_score,
                "m_score": c.m_score,
                "rfm_segment": c.rfm_segment,
            }
            for c in report.champions
        ],
    }


def export_report_json(
    report: RFMReport,
    output_path: str | Path,
    metadata: dict[str, Any] | None = None,
) -> None:
    """Export the distribution report and champion list as JSON.

    Parameters
    ----------
    report:
        Completed RFM report
    output_path:
        Path where JSON file will be saved
    metadata:
        Optional metadata to include (e.g., dataset snapshot)

    Examples
    --------
    >>> report = run_rfm_analysis(RFMRunConfig(data_dir=Path("data")))
    >>> export_report_json(report, "rfm_report.json", metadata={"snapshot": "2018-10"})
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report_to_dict(report, metadata), f, indent=2)

    logger.info(f"RFM report exported to {output_path}")
