"""
Embedding Cache

Caches item embeddings keyed by item id, with a time-to-live (24h by default).
Expired entries read as a miss and are dropped by evict_expired, which the app
runs at startup.

InMemoryEmbeddingCache keeps entries in a dict. JsonEmbeddingCache persists the
same entries to one JSON file:

    {"model": "text-embedding-3-small", "strategy_version": "1.0",
     "entries": {"<item_id>": {"vector": [...], "created_at": 1700000000.0}}}

A file written for another model or strategy version is ignored on load.
put() only updates memory; flush() writes every put since the last flush in one
file write. The resolver flushes once per batch of lookups.
"""

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from recommender.embedding import EMBEDDING_MODEL, STRATEGY_VERSION
from recommender.models.embedding import EmbeddingCacheEntry

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60


class InMemoryEmbeddingCache:
    """
    Embedding cache held in process memory.

    Usage:
        cache = InMemoryEmbeddingCache(ttl_seconds=3600)
        await cache.put("https://bookmeter.com/books/1", vector)
        vector = await cache.get("https://bookmeter.com/books/1")
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, EmbeddingCacheEntry] = {}
        self._lock = asyncio.Lock()
        self._dirty = False

    async def get(self, item_id: str) -> Optional[List[float]]:
        entry = self._entries.get(item_id)
        if entry is None or entry.is_expired(self.ttl_seconds, self._clock()):
            return None
        return list(entry.vector)

    async def put(self, item_id: str, vector: List[float]) -> None:
        async with self._lock:
            self._entries[item_id] = EmbeddingCacheEntry(
                item_id=item_id, vector=list(vector), created_at=self._clock()
            )
            self._dirty = True

    async def flush(self) -> None:
        """Persist puts made since the last flush."""
        async with self._lock:
            if self._dirty:
                await self._persist()
                self._dirty = False

    async def stats(self) -> Dict[str, int]:
        now = self._clock()
        expired = sum(1 for e in self._entries.values() if e.is_expired(self.ttl_seconds, now))
        return {
            "count": len(self._entries),
            "valid": len(self._entries) - expired,
            "expired": expired,
        }

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()
            await self._persist()
            self._dirty = False
        logger.info("[embedding] cache cleared")

    async def evict_expired(self, max_age_seconds: Optional[float] = None) -> int:
        max_age = self.ttl_seconds if max_age_seconds is None else max_age_seconds
        async with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if e.is_expired(max_age, now)]
            for key in expired:
                del self._entries[key]
            if expired or self._dirty:
                await self._persist()
                self._dirty = False
        if expired:
            logger.info("[embedding] evicted %d expired cache entries", len(expired))
        return len(expired)

    async def _persist(self) -> None:
        """Hook for persistent subclasses. Called with the lock held."""


class JsonEmbeddingCache(InMemoryEmbeddingCache):
    """Embedding cache persisted to a JSON file on flush, clear and eviction."""

    def __init__(
        self,
        path: Union[Path, str],
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
        model: str = EMBEDDING_MODEL,
        strategy_version: str = STRATEGY_VERSION,
    ):
        super().__init__(ttl_seconds=ttl_seconds, clock=clock)
        self.path = Path(path)
        self.model = model
        self.strategy_version = strategy_version
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("[embedding] failed to load cache from %s: %s", self.path, e)
            return
        if data.get("model") != self.model or data.get("strategy_version") != self.strategy_version:
            logger.info(
                "[embedding] cache at %s was built with model=%s strategy=%s; starting empty",
                self.path, data.get("model"), data.get("strategy_version"),
            )
            return
        for item_id, raw in (data.get("entries") or {}).items():
            self._entries[item_id] = EmbeddingCacheEntry(item_id=item_id, **raw)
        logger.info("[embedding] loaded %d cached embeddings from %s", len(self._entries), self.path)

    def _dump(self, payload: Dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(payload, f)
        tmp.replace(self.path)

    async def _persist(self) -> None:
        payload = {
            "model": self.model,
            "strategy_version": self.strategy_version,
            "entries": {
                item_id: {"vector": e.vector, "created_at": e.created_at}
                for item_id, e in self._entries.items()
            },
        }
        await asyncio.to_thread(self._dump, payload)
