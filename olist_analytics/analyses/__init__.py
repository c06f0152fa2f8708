"""Reporting views over scored customers."""

from .champions import is_champion, select_champions
from .distribution import FrequencyBucket, frequency_distribution, is_long_tail

__all__ = [
    # Champion list
    "is_champion",
    "select_champions",
    # Frequency distribution
    "FrequencyBucket",
    "frequency_distribution",
    "is_long_tail",
]
