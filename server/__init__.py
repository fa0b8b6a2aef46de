"""
Reading Backlog Recommender Server

Usage: uvicorn server:app --reload --port 8000
"""

from .app import app, create_app
from .config import ServerConfig, get_config, reload_config
from .services import (
    BookService,
    JsonCatalogStore,
    JsonEmbeddingCache,
    OpenAIEmbeddingProvider,
    SqlCatalogStore,
    StatisticsService,
)
from .state import AppState, get_state

__all__ = [
    "app",
    "create_app",
    "AppState",
    "get_state",
    "ServerConfig",
    "get_config",
    "reload_config",
    "BookService",
    "JsonCatalogStore",
    "JsonEmbeddingCache",
    "OpenAIEmbeddingProvider",
    "SqlCatalogStore",
    "StatisticsService",
]
