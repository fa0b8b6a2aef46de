"""Data models for the recommendation engines."""

from .config import DEFAULT_CONFIG, RecommendationConfig, resolve_config
from .embedding import EmbeddingCacheEntry
from .item import CatalogItem, Partition
from .scoring import ScoredItem, rank_scored

__all__ = [
    "DEFAULT_CONFIG",
    "CatalogItem",
    "EmbeddingCacheEntry",
    "Partition",
    "RecommendationConfig",
    "ScoredItem",
    "rank_scored",
    "resolve_config",
]
