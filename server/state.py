"""Application state: catalog store, embedding provider and cache, and the services built on them."""

import logging
from typing import Any, Optional

from recommender.models.config import RecommendationConfig, resolve_config
from recommender.stages.orchestrator import SimilarityOrchestrator
from recommender.stages.ranking.semantic import EmbeddingResolver
from recommender.stages.weekly import WeeklySelector

from .config import ServerConfig, get_config
from .services import (
    BookService,
    InMemoryEmbeddingCache,
    JsonCatalogStore,
    JsonEmbeddingCache,
    OpenAIEmbeddingProvider,
    SqlCatalogStore,
    StatisticsService,
)

logger = logging.getLogger(__name__)


class AppState:
    """
    Global application state and composition root.

    Store, provider and cache may be passed in (tests); otherwise they are built
    from ServerConfig.
    """

    def __init__(
        self,
        config: ServerConfig,
        store: Optional[Any] = None,
        provider: Optional[Any] = None,
        cache: Optional[Any] = None,
        recommendation_config: Optional[RecommendationConfig] = None,
    ):
        self.config = config
        self.recommendation_config = resolve_config(recommendation_config)

        self.store = store if store is not None else self._create_store(config)
        print(f"[startup] Catalog store: {type(self.store).__name__}")

        self.embedding_provider = provider if provider is not None else self._create_provider(config)
        self.embedding_cache = cache if cache is not None else self._create_cache(config)
        print(f"[startup] Embedding cache: {type(self.embedding_cache).__name__}")

        self.resolver: Optional[EmbeddingResolver] = None
        if self.embedding_provider is not None:
            self.resolver = EmbeddingResolver(
                self.embedding_provider, self.embedding_cache, self.recommendation_config
            )
        else:
            print("[startup] OPENAI_API_KEY not set; semantic ranking disabled")

        self.orchestrator = SimilarityOrchestrator(self.store, self.resolver, self.recommendation_config)
        self.weekly_selector = WeeklySelector(self.store, self.recommendation_config)
        self.book_service = BookService(self.store, self.resolver, self.recommendation_config)
        self.statistics_service = StatisticsService(self.store, self.recommendation_config)

    def _create_store(self, config: ServerConfig) -> Any:
        """Create catalog store from CATALOG_SOURCE (json or sql)."""
        if config.catalog_source == "sql":
            if not config.database_url:
                raise ValueError("DATABASE_URL is required when CATALOG_SOURCE=sql")
            return SqlCatalogStore(config.database_url)
        if config.catalog_source != "json":
            raise ValueError(f"Unknown CATALOG_SOURCE: {config.catalog_source!r}")
        return JsonCatalogStore(config.catalog_json_path)

    def _create_provider(self, config: ServerConfig) -> Optional[OpenAIEmbeddingProvider]:
        if not config.openai_api_key:
            return None
        return OpenAIEmbeddingProvider(api_key=config.openai_api_key, model=config.embedding_model)

    def _create_cache(self, config: ServerConfig) -> Any:
        """JSON file cache when EMBEDDING_CACHE_PATH is set, else in-memory."""
        if config.embedding_cache_path is None:
            return InMemoryEmbeddingCache(ttl_seconds=config.embedding_cache_ttl_seconds)
        return JsonEmbeddingCache(
            config.embedding_cache_path,
            ttl_seconds=config.embedding_cache_ttl_seconds,
            model=config.embedding_model,
        )

    @property
    def semantic_enabled(self) -> bool:
        return self.orchestrator.semantic_enabled


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace the global state (tests inject fakes here; None resets)."""
    global _state
    _state = state
