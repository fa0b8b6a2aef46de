"""
Metadata ranking: title words, creator and publisher overlap.

Used when the reference has no description. Pure and synchronous; never fails.
"""

from typing import List

from ...models.config import DEFAULT_CONFIG, RecommendationConfig
from ...models.item import CatalogItem
from ...models.scoring import ScoredItem, rank_scored


def _title_words(title: str) -> List[str]:
    return title.lower().split()


def metadata_score(
    reference: CatalogItem,
    candidate: CatalogItem,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> float:
    """
    Heuristic similarity: shared title words, same creator, same publisher.

    Default weights: 3 per shared title word, 5 for the same creator, 2 for the same publisher.
    Two empty creators (or publishers) are not a match.
    """
    candidate_words = set(_title_words(candidate.title))
    # Repeated reference words count once each
    shared = sum(1 for word in _title_words(reference.title) if word in candidate_words)
    score = config.weight_title_word * shared
    if reference.creator and reference.creator == candidate.creator:
        score += config.weight_creator
    if reference.publisher and reference.publisher == candidate.publisher:
        score += config.weight_publisher
    return score


def rank_by_metadata(
    reference: CatalogItem,
    candidates: List[CatalogItem],
    limit: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> List[CatalogItem]:
    """Rank candidates by metadata_score; zero scores still take part in the ordering."""
    scored = [
        ScoredItem(item=c, score=metadata_score(reference, c, config), position=i)
        for i, c in enumerate(candidates)
    ]
    return rank_scored(scored, limit)
