"""Embedding cache entry model."""

import time
from typing import List

from pydantic import BaseModel, Field


class EmbeddingCacheEntry(BaseModel):
    """A cached embedding vector for one catalog item."""

    item_id: str
    vector: List[float]
    created_at: float = Field(default_factory=time.time)

    def is_expired(self, max_age_seconds: float, now: float) -> bool:
        """True when the entry is older than max_age_seconds at time ``now`` (epoch seconds)."""
        return self.created_at < now - max_age_seconds
