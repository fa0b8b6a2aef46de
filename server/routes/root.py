"""Root and health endpoints."""

from fastapi import APIRouter

from ..services import check_openai_available
from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    return {
        "name": "Reading Backlog Recommender API",
        "version": "1.0.0",
        "catalog_source": state.config.catalog_source,
        "semantic_enabled": state.semantic_enabled,
        "endpoints": {
            "books": ["/api/books", "/api/books/search", "/api/book"],
            "recommendations": [
                "/api/books/weekly",
                "/api/books/similar",
                "/api/books/recommend-by-genre",
            ],
            "stats": [
                "/api/stats/publishers",
                "/api/stats/authors",
                "/api/stats/years",
                "/api/stats/libraries",
            ],
            "embeddings": ["/api/embeddings/cache"],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    openai_ok, openai_msg = check_openai_available(state.config.openai_api_key)
    return {
        "status": "healthy",
        "environment": state.config.environment,
        "catalog": {"source": state.config.catalog_source, "store": type(state.store).__name__},
        "openai": {"available": openai_ok, "message": openai_msg},
    }
