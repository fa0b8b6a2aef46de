"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from ..models import ErrorResponse
from .root import router as root_router
from .books import router as books_router
from .recommendations import router as recommendations_router
from .stats import router as stats_router
from .embeddings import router as embeddings_router

# Documented error bodies; every handler in server.app returns this shape
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request parameters"},
    404: {"model": ErrorResponse, "description": "Book not found"},
    500: {"model": ErrorResponse, "description": "Catalog or internal failure"},
}


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(
        recommendations_router, prefix="/api/books", tags=["recommendations"], responses=ERROR_RESPONSES
    )
    app.include_router(books_router, prefix="/api", tags=["books"], responses=ERROR_RESPONSES)
    app.include_router(stats_router, prefix="/api/stats", tags=["stats"], responses=ERROR_RESPONSES)
    app.include_router(embeddings_router, prefix="/api/embeddings", tags=["embeddings"], responses=ERROR_RESPONSES)
