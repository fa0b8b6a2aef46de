"""
Reading Backlog Recommender — FastAPI app factory.

Use: uvicorn server.app:app
Or:  from server import app
"""

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recommender.errors import RecommenderError

from .config import get_config
from .models import ErrorDetail, ErrorResponse
from .routes import register_routes
from .state import get_state

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id") or uuid.uuid4().hex


def error_body(code: str, message: str, status: int, request_id: str) -> dict:
    return ErrorResponse(
        error=ErrorDetail(code=code, message=message, request_id=request_id),
        status=status,
    ).model_dump()


def register_exception_handlers(app: FastAPI) -> None:
    """Map recommender errors (and anything unexpected) to the JSON error shape."""

    @app.exception_handler(RecommenderError)
    async def _recommender_error(request: Request, exc: RecommenderError):
        request_id = _request_id(request)
        if exc.status >= 500:
            logger.error("[api] %s %s request_id=%s: %s", exc.code, request.url.path, request_id, exc)
        return JSONResponse(
            status_code=exc.status,
            content=error_body(exc.code, str(exc), exc.status, request_id),
        )

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content=error_body("VALIDATION_ERROR", messages, 400, _request_id(request)),
        )

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception):
        request_id = _request_id(request)
        logger.exception("[api] unhandled error on %s request_id=%s", request.url.path, request_id)
        return JSONResponse(
            status_code=500,
            content=error_body("INTERNAL_SERVER_ERROR", "Internal server error", 500, request_id),
        )


def create_app() -> FastAPI:
    """Build FastAPI app with logging, CORS, error handlers, routes, and startup."""
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(
        title="Reading Backlog Recommender API",
        description="Similar-book and weekly recommendations over a personal reading backlog",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    register_routes(app)

    @app.on_event("startup")
    async def evict_expired_embeddings():
        state = get_state()
        try:
            removed = await state.embedding_cache.evict_expired()
            print(f"[startup] Evicted {removed} expired embeddings")
        except Exception as e:
            print(f"[startup] WARNING: Failed to evict expired embeddings: {e}")

    @app.on_event("shutdown")
    async def flush_embeddings():
        try:
            await get_state().embedding_cache.flush()
        except Exception as e:
            print(f"[shutdown] WARNING: Failed to flush embedding cache: {e}")

    @app.on_event("startup")
    async def _startup_logging():
        state = get_state()
        print("Reading Backlog Recommender API starting...")
        print(f"Environment: {state.config.environment}")
        print(f"Catalog source: {state.config.catalog_source}")
        print(f"Semantic ranking: {'enabled' if state.semantic_enabled else 'disabled'}")
        _, errors = state.config.validate()
        for error in errors:
            print(f"[startup] WARNING: {error}")

    return app


app = create_app()
