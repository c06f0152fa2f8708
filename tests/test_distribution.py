"""Tests for the frequency score distribution report."""

from datetime import datetime
from decimal import Decimal

import pytest

from olist_analytics.analyses.distribution import (
    FrequencyBucket,
    frequency_distribution,
    is_long_tail,
)
from olist_analytics.foundation.customer_metrics import CustomerMetrics
from olist_analytics.foundation.rfm import score_customers


def _scored(frequencies):
    return score_customers(
        [
            CustomerMetrics(f"U{i:03d}", datetime(2018, 1, 1), f, Decimal("10.00"))
            for i, f in enumerate(frequencies)
        ]
    )


class TestFrequencyBucket:
    """Test FrequencyBucket validation."""

    def test_percentage_label(self):
        """The label should render the percentage with a % sign."""
        bucket = FrequencyBucket(
            f_score=1, customer_count=5, percentage=Decimal("62.50")
        )
        assert bucket.percentage_label == "62.50%"

    def test_invalid_score_raises_error(self):
        """An f_score outside 1-5 should raise ValueError."""
        with pytest.raises(ValueError, match="f_score must be between 1 and 5"):
            FrequencyBucket(f_score=0, customer_count=1, percentage=Decimal("10.00"))

    def test_percentage_over_100_raises_error(self):
        """A percentage over 100 should raise ValueError."""
        with pytest.raises(ValueError, match="Percentage must be 0-100"):
            FrequencyBucket(f_score=1, customer_count=1, percentage=Decimal("100.01"))


class TestFrequencyDistribution:
    """Test frequency_distribution function."""

    def test_empty_population_returns_empty_report(self):
        """An empty population should give an empty report."""
        assert frequency_distribution([]) == []

    def test_example_distribution(self):
        """Counts and labels should match the worked example, highest score first."""
        buckets = frequency_distribution(_scored([1, 1, 1, 1, 1, 2, 3, 5]))

        assert [(b.f_score, b.customer_count, b.percentage_label) for b in buckets] == [
            (5, 1, "12.50%"),
            (3, 1, "12.50%"),
            (2, 1, "12.50%"),
            (1, 5, "62.50%"),
        ]

    def test_empty_scores_are_absent(self):
        """Scores nobody holds should not be reported."""
        buckets = frequency_distribution(_scored([1, 1, 4]))
        assert [b.f_score for b in buckets] == [4, 1]

    def test_single_bucket_is_one_hundred_percent(self):
        """A single populated score should hold 100%."""
        buckets = frequency_distribution(_scored([1, 1, 1]))
        assert len(buckets) == 1
        assert buckets[0].percentage_label == "100.00%"

    def test_counts_sum_to_population(self):
        """Bucket counts should add up to the population."""
        frequencies = [1] * 61 + [2] * 17 + [3] * 9 + [4] * 3 + [7] * 7
        buckets = frequency_distribution(_scored(frequencies))
        assert sum(b.customer_count for b in buckets) == len(frequencies)

    def test_percentages_sum_to_one_hundred(self):
        """Independent per-bucket rounding stays within 0.05 of 100."""
        frequencies = [1] * 5 + [2] * 1 + [3] * 1  # 71.43 + 14.29 + 14.29
        buckets = frequency_distribution(_scored(frequencies))
        total = sum(b.percentage for b in buckets)
        assert abs(total - Decimal("100")) <= Decimal("0.05")

    def test_rounding_half_up(self):
        """Percentages should be rounded half-up to 2 decimal places."""
        # 1 / 8 = 12.5% exactly; 1 / 3 = 33.333...%; 2 / 3 = 66.666...%
        buckets = {b.f_score: b for b in frequency_distribution(_scored([1, 1, 2]))}
        assert buckets[1].percentage == Decimal("66.67")
        assert buckets[2].percentage == Decimal("33.33")


class TestIsLongTail:
    """Test long-tail skew check."""

    def test_typical_olist_shape(self):
        """An absent f_score of 4 should not break the tail."""
        buckets = frequency_distribution(_scored([1] * 90 + [2] * 7 + [3] * 2 + [5]))
        assert is_long_tail(buckets)

    def test_missing_middle_score_still_long_tail(self):
        """Mostly one-time buyers with a few repeats should be long-tail."""
        buckets = frequency_distribution(_scored([1] * 9 + [2]))
        assert is_long_tail(buckets)

    def test_repeat_buyers_dominant_is_not_long_tail(self):
        """More repeat buyers than one-time buyers should not be long-tail."""
        buckets = frequency_distribution(_scored([1] * 2 + [2] * 5))
        assert not is_long_tail(buckets)

    def test_share_growing_at_top_is_not_long_tail(self):
        """A share that grows towards score 5 should not be long-tail."""
        buckets = frequency_distribution(_scored([1] * 10 + [4] * 1 + [5] * 3))
        assert not is_long_tail(buckets)

    def test_empty_report(self):
        """An empty report should not be long-tail."""
        assert not is_long_tail([])

    def test_missing_one_time_buyers_is_not_long_tail(self):
        """A report without f_score 1 should not count as long-tail."""
        buckets = frequency_distribution(_scored([2] * 3 + [3]))
        assert not is_long_tail(buckets)

    def test_bucket_order_does_not_matter(self):
        """Buckets should be compared in f_score order whatever the input order."""
        buckets = frequency_distribution(_scored([1] * 6 + [2] * 3 + [4]))
        assert is_long_tail(list(reversed(buckets)))
