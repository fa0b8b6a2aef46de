"""
Reading Backlog Recommender — similarity and weekly pick engines.

Single entry point for the recommender package:
- models/: RecommendationConfig, CatalogItem, Partition, ScoredItem
- stages/: key terms, candidate pool, ranking engines, orchestrator, weekly selector
- embedding/: get_embed_text, version and model constants
- ports: CatalogStore, EmbeddingProvider, EmbeddingCache protocols
"""

from .embedding.embedding_strategy import (
    EMBEDDING_DIMENSIONS,
    EMBEDDING_MODEL,
    STRATEGY_VERSION,
    get_embed_text,
)
from .errors import (
    NotFoundError,
    ProviderError,
    RecommenderError,
    StoreError,
    ValidationError,
)
from .models.config import DEFAULT_CONFIG, RecommendationConfig, resolve_config
from .models.embedding import EmbeddingCacheEntry
from .models.item import CatalogItem, Partition
from .models.scoring import ScoredItem
from .ports import CatalogStore, EmbeddingCache, EmbeddingProvider
from .stages.genre import pick_by_genre
from .stages.key_terms import extract_key_terms
from .stages.orchestrator import SimilarityOrchestrator
from .stages.ranking import (
    EmbeddingResolver,
    rank_by_description,
    rank_by_embedding,
    rank_by_metadata,
    rank_by_vector,
)
from .stages.weekly import WeeklySelector, week_number
from .utils.similarity import cosine_similarity

__all__ = [
    "CatalogItem",
    "CatalogStore",
    "DEFAULT_CONFIG",
    "EMBEDDING_DIMENSIONS",
    "EMBEDDING_MODEL",
    "EmbeddingCache",
    "EmbeddingCacheEntry",
    "EmbeddingProvider",
    "EmbeddingResolver",
    "NotFoundError",
    "Partition",
    "ProviderError",
    "RecommendationConfig",
    "RecommenderError",
    "STRATEGY_VERSION",
    "ScoredItem",
    "SimilarityOrchestrator",
    "StoreError",
    "ValidationError",
    "WeeklySelector",
    "cosine_similarity",
    "extract_key_terms",
    "get_embed_text",
    "pick_by_genre",
    "rank_by_description",
    "rank_by_embedding",
    "rank_by_metadata",
    "rank_by_vector",
    "resolve_config",
    "week_number",
]
