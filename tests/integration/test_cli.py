"""Integration tests for the RFM segmentation CLI.

Tests the complete workflow from Olist CSV extracts through the CLI command
to the champion list, scores CSV and JSON report.
"""

import json
from datetime import date

import pandas as pd
import pytest

from olist_analytics.cli import rfm_segmentation_cli
from olist_analytics.synthetic import (
    OlistScenarioConfig,
    generate_olist_dataset,
    write_olist_csvs,
)


@pytest.fixture
def olist_dir(tmp_path):
    """Synthetic Olist extracts with enough repeat buyers to find champions."""
    tables = generate_olist_dataset(
        3000,
        date(2017, 1, 1),
        date(2018, 8, 31),
        scenario=OlistScenarioConfig(repeat_probability=0.35, seed=42),
    )
    data_dir = tmp_path / "olist"
    write_olist_csvs(tables, data_dir)
    return data_dir


class TestRfmSegmentationCli:
    """Test the olist-rfm command end to end."""

    def test_writes_all_outputs(self, olist_dir, tmp_path):
        """Champion, scores and report files should all be written and agree."""
        champions_path = tmp_path / "out" / "champions.csv"
        scores_path = tmp_path / "out" / "scores.csv"
        report_path = tmp_path / "out" / "report.json"

        exit_code = rfm_segmentation_cli(
            [
                str(olist_dir),
                "--champions-output",
                str(champions_path),
                "--scores-output",
                str(scores_path),
                "--report-output",
                str(report_path),
            ]
        )

        assert exit_code == 0
        champions = pd.read_csv(champions_path, dtype={"rfm_segment": str})
        scores = pd.read_csv(scores_path, dtype={"rfm_segment": str})
        report = json.loads(report_path.read_text())

        assert list(champions.columns) == [
            "customer_unique_id",
            "r_score",
            "f_score",
            "m_score",
            "rfm_segment",
        ]
        assert (champions["r_score"] == 5).all()
        assert (champions["f_score"] >= 4).all()
        assert (champions["m_score"] == 5).all()
        assert report["total_customers"] == len(scores)
        assert len(report["champions"]) == len(champions)
        buckets = report["frequency_distribution"]
        assert sum(b["customer_count"] for b in buckets) == len(scores)

        # Champion order follows monetary descending
        monetary = scores.set_index("customer_unique_id")["monetary"]
        champion_spend = list(monetary.loc[champions["customer_unique_id"]])
        assert champion_spend == sorted(champion_spend, reverse=True)

    def test_report_to_stdout(self, olist_dir, capsys):
        """Without --report-output the JSON report should go to stdout."""
        exit_code = rfm_segmentation_cli([str(olist_dir)])

        assert exit_code == 0
        payload = json.loads(capsys.readouterr().out)
        f_scores = [b["f_score"] for b in payload["frequency_distribution"]]
        assert f_scores == sorted(f_scores, reverse=True)
        assert payload["metadata"]["data_dir"] == str(olist_dir)

    def test_missing_data_dir_returns_error(self, tmp_path):
        """A missing data directory should return exit code 1."""
        assert rfm_segmentation_cli([str(tmp_path / "nowhere")]) == 1

    def test_invalid_champion_threshold_returns_error(self, olist_dir):
        """An out-of-range champion threshold should return exit code 1."""
        assert rfm_segmentation_cli([str(olist_dir), "--min-frequency-score", "9"]) == 1

    def test_invalid_log_level_returns_error(self, olist_dir, capsys):
        """An unknown log level should return exit code 1 with stdout left empty."""
        exit_code = rfm_segmentation_cli([str(olist_dir), "--log-level", "verbose"])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert captured.out == ""
        assert "Unknown log level: verbose" in captured.err

    def test_lowercase_log_level_accepted(self, olist_dir, capsys):
        """Log level names should be accepted in any case."""
        assert rfm_segmentation_cli([str(olist_dir), "--log-level", "warning"]) == 0
        assert json.loads(capsys.readouterr().out)["total_customers"] > 0

    def test_delivered_status_option(self, olist_dir, capsys):
        """--delivered-status should switch the qualifying order status."""
        assert rfm_segmentation_cli([str(olist_dir)]) == 0
        delivered = json.loads(capsys.readouterr().out)["total_customers"]
        exit_code = rfm_segmentation_cli(
            [str(olist_dir), "--delivered-status", "shipped"]
        )
        assert exit_code == 0
        shipped = json.loads(capsys.readouterr().out)["total_customers"]

        assert 0 < shipped < delivered
