"""
Collaborator protocols consumed by the recommender core.

Catalog storage, the embedding provider and the embedding cache are injected into
the orchestrator and selector. Implementations live in server.services; tests use
in-memory fakes.
"""

from typing import Dict, List, Optional, Protocol

from .models.item import CatalogItem, Partition


class CatalogStore(Protocol):
    """Read-only catalog access. Rows are normalized to CatalogItem before they are returned."""

    async def list_items(self, partition: Partition) -> List[CatalogItem]:
        """All items of one partition, in storage order."""
        ...

    async def get_item(self, item_id: str, partition: Partition) -> Optional[CatalogItem]:
        """One item by id within a partition, or None."""
        ...

    async def list_items_with_text(
        self,
        partition: Partition,
        exclude_id: str,
        cap: int,
    ) -> List[CatalogItem]:
        """Up to ``cap`` items with a non-blank description, excluding ``exclude_id``."""
        ...

    async def list_all(self) -> List[CatalogItem]:
        """Items of every partition."""
        ...


class EmbeddingProvider(Protocol):
    """Text -> fixed-length vector. Fallible and slow; callers wrap it in resilient_call."""

    async def embed(self, text: str) -> List[float]:
        ...


class EmbeddingCache(Protocol):
    """Best-effort item_id -> vector cache. A miss returns None and is never an error."""

    async def get(self, item_id: str) -> Optional[List[float]]:
        ...

    async def put(self, item_id: str, vector: List[float]) -> None:
        ...

    async def flush(self) -> None:
        """Persist puts made since the last flush; a no-op for caches without storage."""
        ...

    async def stats(self) -> Dict[str, int]:
        ...

    async def clear(self) -> None:
        ...

    async def evict_expired(self, max_age_seconds: Optional[float] = None) -> int:
        """Drop entries older than max_age_seconds (default: the cache's TTL). Returns count removed."""
        ...
