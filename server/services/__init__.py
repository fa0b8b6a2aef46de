"""Backing logic: catalog stores, embedding provider and cache, browsing and statistics services."""

from .book_service import BookService, PaginatedResult
from .catalog_store import InMemoryCatalogStore, JsonCatalogStore
from .embedding_cache import InMemoryEmbeddingCache, JsonEmbeddingCache
from .embedding_provider import OpenAIEmbeddingProvider, check_openai_available
from .sql_catalog_store import SqlCatalogStore
from .statistics_service import StatisticsService

__all__ = [
    "BookService",
    "InMemoryCatalogStore",
    "InMemoryEmbeddingCache",
    "JsonCatalogStore",
    "JsonEmbeddingCache",
    "OpenAIEmbeddingProvider",
    "PaginatedResult",
    "SqlCatalogStore",
    "StatisticsService",
    "check_openai_available",
]
