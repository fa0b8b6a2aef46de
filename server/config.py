"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from recommender.embedding import EMBEDDING_MODEL

# Single .env at the project root
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)

CATALOG_SOURCES = ("json", "sql")


@dataclass
class ServerConfig:
    """Server configuration."""

    # API Keys
    openai_api_key: Optional[str] = None

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "development"
    log_level: str = "INFO"

    # Catalog source: "json" | "sql"
    catalog_source: str = "json"
    # When catalog_source=json: file with {"wish": [...], "stacked": [...]}
    catalog_json_path: Path = Path(__file__).parent.parent / "data" / "books.json"
    # When catalog_source=sql: SQLAlchemy URL, e.g. sqlite:///data/books.db
    database_url: Optional[str] = None

    # Embeddings
    embedding_model: str = EMBEDDING_MODEL
    embedding_cache_path: Optional[Path] = Path(__file__).parent.parent / "cache" / "embeddings.json"
    embedding_cache_ttl_seconds: float = 24 * 60 * 60

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent
        catalog_source = os.getenv("CATALOG_SOURCE", "").strip().lower() or "json"

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            catalog_source=catalog_source,
            catalog_json_path=_path_env("CATALOG_JSON_PATH", base_dir / "data" / "books.json"),
            database_url=os.getenv("DATABASE_URL") or None,
            embedding_model=os.getenv("EMBEDDING_MODEL", EMBEDDING_MODEL),
            embedding_cache_path=_path_env("EMBEDDING_CACHE_PATH", base_dir / "cache" / "embeddings.json"),
            embedding_cache_ttl_seconds=float(os.getenv("EMBEDDING_CACHE_TTL_SECONDS", str(24 * 60 * 60))),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.catalog_source not in CATALOG_SOURCES:
            errors.append(f"Unknown CATALOG_SOURCE: {self.catalog_source!r} (expected one of {CATALOG_SOURCES})")
        if self.catalog_source == "json" and not self.catalog_json_path.exists():
            errors.append(f"Catalog JSON not found: {self.catalog_json_path}")
        if self.catalog_source == "sql" and not self.database_url:
            errors.append("DATABASE_URL is required when CATALOG_SOURCE=sql")
        if self.embedding_cache_ttl_seconds <= 0:
            errors.append("EMBEDDING_CACHE_TTL_SECONDS must be positive")

        # A missing OPENAI_API_KEY only disables the semantic engine

        return len(errors) == 0, errors

    def ensure_directories(self):
        """Create required directories if they don't exist."""
        if self.embedding_cache_path is not None:
            self.embedding_cache_path.parent.mkdir(parents=True, exist_ok=True)


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
        _config.ensure_directories()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
