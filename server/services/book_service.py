"""
Book Service

Browsing operations over the catalog that sit beside the recommender:
paginated listing, lookup by URL, keyword search re-ranked by embeddings,
and a random pick by author or publisher.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional

from recommender.errors import NotFoundError, ProviderError, ValidationError
from recommender.models.config import DEFAULT_CONFIG, RecommendationConfig
from recommender.models.item import CatalogItem, Partition
from recommender.ports import CatalogStore
from recommender.stages.candidate_pool import store_call
from recommender.stages.genre import pick_by_genre
from recommender.stages.ranking.semantic import EmbeddingResolver, rank_by_vector

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
SEARCH_CANDIDATE_CAP = 100


@dataclass
class PaginatedResult:
    """One page of items plus the totals a client needs to page through them."""

    items: List[CatalogItem] = field(default_factory=list)
    total_items: int = 0
    total_pages: int = 0
    current_page: int = 1
    has_next_page: bool = False
    has_prev_page: bool = False

    @classmethod
    def from_items(cls, items: List[CatalogItem], page: int, limit: int) -> "PaginatedResult":
        total_pages = math.ceil(len(items) / limit) if items else 0
        start = (page - 1) * limit
        return cls(
            items=items[start : start + limit],
            total_items=len(items),
            total_pages=total_pages,
            current_page=page,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


def validate_pagination(page: int, limit: int) -> None:
    if page < 1:
        raise ValidationError(f"page must be >= 1, got {page}")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}, got {limit}")


def matches_query(item: CatalogItem, query: str) -> bool:
    """Case-insensitive substring match on title, author, publisher or description."""
    needle = query.lower()
    fields = (item.title, item.creator, item.publisher, item.descriptive_text or "")
    return any(needle in f.lower() for f in fields)


class BookService:
    """Catalog browsing backed by a CatalogStore and, for search, an EmbeddingResolver."""

    def __init__(
        self,
        store: CatalogStore,
        resolver: Optional[EmbeddingResolver] = None,
        config: RecommendationConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.resolver = resolver
        self.config = config
        self._rng = rng

    async def list_books(
        self,
        partition: Partition,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult:
        validate_pagination(page, limit)
        items = await store_call(self.store.list_items, partition, config=self.config, label="list_items")
        return PaginatedResult.from_items(items, page, limit)

    async def get_book(self, partition: Partition, url: str) -> CatalogItem:
        if not url:
            raise ValidationError("Book URL is required")
        item = await store_call(self.store.get_item, url, partition, config=self.config, label="get_item")
        if item is None:
            raise NotFoundError(f"Book not found: {url}")
        return item

    async def search_books(
        self,
        partition: Partition,
        query: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult:
        """
        Keyword search ranked by semantic similarity to the query.

        Up to SEARCH_CANDIDATE_CAP keyword matches are re-ranked by cosine similarity
        between the query embedding and each book's embedding. If the query cannot be
        embedded the keyword matches are returned in storage order.
        """
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query is required")
        validate_pagination(page, limit)

        items = await store_call(self.store.list_items, partition, config=self.config, label="list_items")
        matches = [item for item in items if matches_query(item, query)][:SEARCH_CANDIDATE_CAP]
        logger.info("[search] query=%r partition=%s keyword_matches=%d", query, partition.value, len(matches))

        ranked = matches
        if matches and self.resolver is not None and self.config.semantic_enabled:
            try:
                query_vector = await self.resolver.embed_text(query, label="embed query")
                ranked = await rank_by_vector(query_vector, matches, len(matches), self.resolver)
            except ProviderError as e:
                logger.warning("[search] semantic ranking failed, using keyword order: %s", e)
        return PaginatedResult.from_items(ranked, page, limit)

    async def recommend_by_genre(
        self,
        partition: Partition,
        genre_type: str,
        genre_value: str,
    ) -> CatalogItem:
        """Random book in ``partition`` with the given author or publisher."""
        items = await store_call(self.store.list_items, partition, config=self.config, label="list_items")
        return pick_by_genre(items, genre_type, genre_value, rng=self._rng)
