"""Champion list: the highest-value RFM segment.

Champions bought recently, repeatedly and heavily. They are the usual
target for loyalty and referral campaigns.
"""

from __future__ import annotations

from typing import Sequence

from olist_analytics.config import ChampionCriteria
from olist_analytics.foundation.rfm import ScoredCustomer


def is_champion(
    customer: ScoredCustomer, criteria: ChampionCriteria | None = None
) -> bool:
    """Return True if the customer meets every champion threshold."""
    criteria = criteria or ChampionCriteria()
    return (
        customer.r_score >= criteria.min_recency_score
        and customer.f_score >= criteria.min_frequency_score
        and customer.m_score >= criteria.min_monetary_score
    )


def select_champions(
    scored: Sequence[ScoredCustomer],
    criteria: ChampionCriteria | None = None,
) -> list[ScoredCustomer]:
    """Filter scored customers down to champions.

    With the default criteria this selects ``r_score == 5``,
    ``f_score >= 4`` and ``m_score == 5``.

    Parameters
    ----------
    scored:
        Scored customers for the whole population
    criteria:
        Optional thresholds; defaults to :class:`ChampionCriteria`

    Returns
    -------
    list[ScoredCustomer]
        Champions ordered by monetary descending, ties by customer_unique_id
    """
    champions = [c for c in scored if is_champion(c, criteria)]
    champions.sort(key=lambda c: c.customer_unique_id)
    champions.sort(key=lambda c: c.monetary, reverse=True)
    return champions
