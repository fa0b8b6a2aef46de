"""Embedding cache endpoints."""

from fastapi import APIRouter

from ..models import EmbeddingCacheStats
from ..state import get_state

router = APIRouter()


@router.get("/cache", response_model=EmbeddingCacheStats)
async def cache_stats():
    """Entry counts for the embedding cache."""
    state = get_state()
    stats = await state.embedding_cache.stats()
    return EmbeddingCacheStats(
        count=stats.get("count", 0),
        valid=stats.get("valid", stats.get("count", 0)),
        expired=stats.get("expired", 0),
        ttl_seconds=state.config.embedding_cache_ttl_seconds,
    )


@router.delete("/cache")
async def clear_cache():
    state = get_state()
    await state.embedding_cache.clear()
    return {"cleared": True}
