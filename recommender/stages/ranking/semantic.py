"""
Semantic ranking: cosine similarity between cached item embeddings.

EmbeddingResolver implements cache lookup -> provider call -> cache store for one item.
rank_by_embedding fans out one lookup per candidate and awaits them all; a candidate
whose lookup fails is scored FAILED_SCORE and left out of the result. A failure of
the reference embedding, or of every candidate embedding, is raised as ProviderError.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from ...embedding.embedding_strategy import get_embed_text, validate_item_for_embedding
from ...errors import ProviderError
from ...models.config import DEFAULT_CONFIG, RecommendationConfig
from ...models.item import CatalogItem
from ...models.scoring import ScoredItem, rank_scored
from ...ports import EmbeddingCache, EmbeddingProvider
from ...utils.resilience import resilient_call, retry_options
from ...utils.similarity import cosine_similarity

logger = logging.getLogger(__name__)

# Score given to a candidate whose embedding could not be obtained
FAILED_SCORE = -1.0


class EmbeddingResolver:
    """
    Resolves item embeddings through the cache, falling back to the provider.

    The cache is best-effort: read errors count as a miss and write errors are logged.
    Concurrent resolutions of the same item may both call the provider; the last
    cache write wins, which is fine because the text (and thus the vector) is the same.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        cache: Optional[EmbeddingCache] = None,
        config: RecommendationConfig = DEFAULT_CONFIG,
    ):
        self._provider = provider
        self._cache = cache
        self._config = config

    async def embed_text(self, text: str, label: str = "embed") -> List[float]:
        """Provider call with retries and timeout. Any failure becomes ProviderError."""
        try:
            return await resilient_call(
                self._provider.embed,
                text,
                label=label,
                **retry_options(self._config, timeout=self._config.embedding_timeout_seconds),
            )
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"Embedding request failed: {e!r}") from e

    async def get_embedding(self, item: CatalogItem) -> List[float]:
        """Cached vector for ``item``, computing and caching it on a miss."""
        cached = await self._cache_get(item.id)
        if cached:
            return cached
        valid, message = validate_item_for_embedding(item)
        if not valid:
            raise ProviderError(f"Cannot embed item {item.id!r}: {message}")
        vector = await self.embed_text(get_embed_text(item), label=f"embed item={item.id}")
        await self._cache_put(item.id, vector)
        return vector

    async def _cache_get(self, item_id: str) -> Optional[List[float]]:
        if self._cache is None:
            return None
        try:
            return await self._cache.get(item_id)
        except Exception as e:
            logger.warning("[embedding] cache read failed item=%s error=%r, treating as miss", item_id, e)
            return None

    async def _cache_put(self, item_id: str, vector: List[float]) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.put(item_id, vector)
        except Exception as e:
            logger.warning("[embedding] cache write failed item=%s error=%r", item_id, e)

    async def flush(self) -> None:
        """Persist cache writes made since the last flush. Failures are logged."""
        if self._cache is None:
            return
        try:
            await self._cache.flush()
        except Exception as e:
            logger.warning("[embedding] cache flush failed error=%r", e)


async def score_by_vector(
    query_vector: Sequence[float],
    candidates: List[CatalogItem],
    resolver: EmbeddingResolver,
) -> List[ScoredItem]:
    """
    Cosine score of every candidate against ``query_vector``.

    Lookups run concurrently. Failed candidates get FAILED_SCORE and are marked excluded.
    """
    results = await asyncio.gather(
        *(resolver.get_embedding(c) for c in candidates),
        return_exceptions=True,
    )
    await resolver.flush()
    scored: List[ScoredItem] = []
    for i, (candidate, result) in enumerate(zip(candidates, results)):
        if isinstance(result, BaseException):
            logger.warning("[semantic] embedding unavailable item=%s error=%r", candidate.id, result)
            scored.append(ScoredItem(item=candidate, score=FAILED_SCORE, position=i, excluded=True))
            continue
        try:
            score = cosine_similarity(query_vector, result)
        except ValueError as e:
            logger.warning("[semantic] unusable embedding item=%s error=%s", candidate.id, e)
            scored.append(ScoredItem(item=candidate, score=FAILED_SCORE, position=i, excluded=True))
            continue
        scored.append(ScoredItem(item=candidate, score=score, position=i))
    return scored


async def rank_by_vector(
    query_vector: Sequence[float],
    candidates: List[CatalogItem],
    limit: int,
    resolver: EmbeddingResolver,
) -> List[CatalogItem]:
    """
    Rank candidates by cosine similarity to ``query_vector``; failed candidates are dropped.

    Raises:
        ProviderError: there were candidates but none of their embeddings could be obtained.
    """
    scored = await score_by_vector(query_vector, candidates, resolver)
    if scored and all(s.excluded for s in scored):
        raise ProviderError(f"No candidate embedding available ({len(scored)} candidates)")
    return rank_scored(scored, limit)


async def rank_by_embedding(
    reference: CatalogItem,
    candidates: List[CatalogItem],
    limit: int,
    resolver: EmbeddingResolver,
) -> List[CatalogItem]:
    """
    Rank candidates by embedding similarity to the reference item.

    Raises:
        ProviderError: the reference embedding could not be obtained, or no
            candidate embedding could.
    """
    reference_vector = await resolver.get_embedding(reference)
    ranked = await rank_by_vector(reference_vector, candidates, limit, resolver)
    logger.debug(
        "[semantic] reference=%s candidates=%d returned=%d",
        reference.id, len(candidates), len(ranked),
    )
    return ranked
