"""
Ranking engines for "similar items".

Public API:
- lexical: rank_by_description (TF-IDF over descriptions).
- semantic: rank_by_embedding, rank_by_vector, EmbeddingResolver.
- metadata: rank_by_metadata (title words / creator / publisher).
"""

from .lexical import key_term_scores, rank_by_description
from .metadata import metadata_score, rank_by_metadata
from .semantic import FAILED_SCORE, EmbeddingResolver, rank_by_embedding, rank_by_vector

__all__ = [
    "EmbeddingResolver",
    "FAILED_SCORE",
    "key_term_scores",
    "metadata_score",
    "rank_by_description",
    "rank_by_embedding",
    "rank_by_metadata",
    "rank_by_vector",
]
