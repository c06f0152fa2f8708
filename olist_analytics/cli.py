"""Command line entry points for Olist RFM segmentation."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from olist_analytics.config import ChampionCriteria, RFMRunConfig
from olist_analytics.exports import (
    export_champions_csv,
    export_report_json,
    export_scores_csv,
    report_to_dict,
)
from olist_analytics.foundation.records import DELIVERED_STATUS
from olist_analytics.observability import configure_logging
from olist_analytics.pipeline import run_rfm_analysis

logger = structlog.get_logger(__name__)


def rfm_segmentation_cli(argv: list[str] | None = None) -> int:
    """Score Olist customers and report champions and frequency distribution.

    This command runs the full segmentation:
    1. Loads the customers, orders and payments CSV extracts
    2. Aggregates delivered orders per customer_unique_id
    3. Scores recency and monetary by quintile, frequency by fixed thresholds
    4. Writes the champion list, full scores and/or JSON report

    Without ``--report-output`` the JSON report is printed to stdout.

    Args:
        argv: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="Score Olist customers with RFM segmentation"
    )
    parser.add_argument(
        "data_dir", type=Path, help="Directory containing the Olist CSV extracts"
    )
    parser.add_argument(
        "--champions-output",
        type=Path,
        help="Path for champion list CSV (highest spender first)",
    )
    parser.add_argument(
        "--scores-output",
        type=Path,
        help="Path for CSV with every scored customer",
    )
    parser.add_argument(
        "--report-output",
        type=Path,
        help="Path for JSON report (defaults to stdout)",
    )
    parser.add_argument(
        "--delivered-status",
        default=DELIVERED_STATUS,
        help=(
            "Order status counted as a completed purchase "
            f"(default: {DELIVERED_STATUS})"
        ),
    )
    parser.add_argument(
        "--min-frequency-score",
        type=int,
        default=4,
        help="Minimum frequency score for champions (default: 4)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Log level for stderr output (default: INFO)",
    )

    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        # Logging is not set up yet; keep stdout clean for the report.
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        config = RFMRunConfig(
            data_dir=args.data_dir,
            delivered_status=args.delivered_status,
            champions=ChampionCriteria(min_frequency_score=args.min_frequency_score),
        )
    except ValidationError as exc:
        logger.error("invalid_configuration", error=str(exc))
        return 1

    try:
        report = run_rfm_analysis(config)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("rfm_run_failed", error=str(exc))
        return 1

    if report.total_customers == 0:
        logger.warning("no_scored_customers", data_dir=str(config.data_dir))

    metadata = {"data_dir": str(config.data_dir)}
    if args.champions_output:
        export_champions_csv(report, args.champions_output)
    if args.scores_output:
        export_scores_csv(report, args.scores_output)
    if args.report_output:
        export_report_json(report, args.report_output, metadata=metadata)
    else:  # stdout fallback enables piping in shell usage.
        json.dump(report_to_dict(report, metadata), fp=sys.stdout, indent=2)
        print()

    return 0


def main() -> None:
    raise SystemExit(rfm_segmentation_cli())


if __name__ == "__main__":  # pragma: no cover
    main()
