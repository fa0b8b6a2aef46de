"""
Similarity orchestrator — picks the ranking engine for a "similar items" request.

Order: semantic (embeddings) first; on any embedding failure, lexical (TF-IDF)
when the reference has a description, otherwise metadata. The steps never loop
back. Embedding failures are logged and absorbed here; store failures, unknown
references and invalid arguments reach the caller.
"""

import logging
from typing import List, Optional, Union

from ..errors import ValidationError
from ..models.config import RecommendationConfig, resolve_config
from ..models.item import CatalogItem, Partition
from ..ports import CatalogStore
from .candidate_pool import get_candidate_pool, get_text_candidates, load_reference
from .ranking import EmbeddingResolver, rank_by_description, rank_by_embedding, rank_by_metadata

logger = logging.getLogger(__name__)


def validate_similar_request(reference_id: str, partition: Union[str, Partition], limit: int) -> Partition:
    """Check arguments before any external call. Returns the parsed partition."""
    if not reference_id or not str(reference_id).strip():
        raise ValidationError("reference_id is required")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError(f"limit must be a positive integer, got {limit!r}")
    return Partition.parse(partition)


class SimilarityOrchestrator:
    """
    Finds items similar to a reference item within one partition.

    Collaborators are injected: a CatalogStore and, optionally, an EmbeddingResolver.
    Without a resolver (or with semantic_enabled=False) the semantic step is skipped.
    """

    def __init__(
        self,
        store: CatalogStore,
        resolver: Optional[EmbeddingResolver] = None,
        config: Optional[RecommendationConfig] = None,
    ):
        self._store = store
        self._resolver = resolver
        self._config = resolve_config(config)

    @property
    def semantic_enabled(self) -> bool:
        return self._resolver is not None and self._config.semantic_enabled

    async def find_similar(
        self,
        reference_id: str,
        partition: Union[str, Partition],
        limit: int = 5,
    ) -> List[CatalogItem]:
        """
        Items similar to ``reference_id``, best first, at most ``limit``.

        Raises:
            ValidationError: empty id, unknown partition or non-positive limit.
            NotFoundError: the reference is not in ``partition``.
            StoreError: the catalog could not be read.
        """
        partition = validate_similar_request(reference_id, partition, limit)
        config = self._config

        # 1) Reference and candidate pool
        reference = await load_reference(self._store, reference_id, partition, config)
        pool = await get_candidate_pool(self._store, reference, partition, config)

        # 2) Semantic engine; any failure falls through to the offline engines
        if self.semantic_enabled:
            try:
                ranked = await rank_by_embedding(reference, pool, limit, self._resolver)
                logger.info(
                    "[similar] engine=semantic reference=%s pool=%d returned=%d",
                    reference.id, len(pool), len(ranked),
                )
                return ranked
            except Exception as e:
                logger.warning(
                    "[similar] semantic engine failed reference=%s error=%r, falling back",
                    reference.id, e,
                )

        # 3) Lexical when the reference has a description, metadata otherwise
        if reference.has_text:
            candidates = await get_text_candidates(self._store, reference, partition, config)
            ranked = rank_by_description(reference, candidates, limit, config.max_key_terms)
            engine = "lexical"
        else:
            candidates = pool
            ranked = rank_by_metadata(reference, candidates, limit, config)
            engine = "metadata"

        logger.info(
            "[similar] engine=%s reference=%s candidates=%d returned=%d",
            engine, reference.id, len(candidates), len(ranked),
        )
        return ranked
