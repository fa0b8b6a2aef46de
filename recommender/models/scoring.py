"""
Scoring model — ScoredItem and the shared rank-and-truncate step.

Every engine produces one score per candidate and then ranks the same way:
descending by score, ties kept in input order, truncated to the limit.
"""

from typing import List

from pydantic import BaseModel

from .item import CatalogItem


class ScoredItem(BaseModel):
    """A catalog item with the score one engine gave it."""

    item: CatalogItem
    score: float
    position: int  # index in the engine's input, used as the tie-breaker
    excluded: bool = False  # scored but never surfaced (e.g. embedding unavailable)


def rank_scored(scored: List[ScoredItem], limit: int) -> List[CatalogItem]:
    """
    Sort by score (descending, stable on input position) and return up to ``limit`` items.

    Excluded entries are dropped before truncation.
    """
    kept = [s for s in scored if not s.excluded]
    ordered = sorted(kept, key=lambda s: (-s.score, s.position))
    return [s.item for s in ordered[: max(limit, 0)]]
