"""
Algorithm configuration — candidate pool, lexical, semantic, metadata and weekly parameters.

RecommendationConfig defaults are defined here. The server may pass a dict
(e.g. from a JSON config file); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, model_validator


class RecommendationConfig(BaseModel):
    """Configuration for the similarity and recommendation engines."""

    # -------------------------------------------------------------------------
    # Candidate Pool
    # -------------------------------------------------------------------------

    # Max number of candidates compared against a reference item.
    # Bounds embedding calls and TF-IDF corpus size per request.
    candidate_cap: int = 100

    # -------------------------------------------------------------------------
    # Lexical (TF-IDF)
    # -------------------------------------------------------------------------

    # Max key terms extracted from the reference description. Scoring only
    # looks at these terms, so this bounds cost to O(terms x candidates).
    max_key_terms: int = 20

    # -------------------------------------------------------------------------
    # Semantic (embeddings)
    # -------------------------------------------------------------------------

    # When False the orchestrator skips the embedding engine entirely.
    semantic_enabled: bool = True

    # Timeout for a single embedding provider call. A timed-out call counts as a failure.
    embedding_timeout_seconds: float = 10.0

    # -------------------------------------------------------------------------
    # Resilient calls (store and provider)
    # -------------------------------------------------------------------------

    # Total attempts per external call, including the first one.
    retry_max_tries: int = 3
    # Exponential backoff factor in seconds (wait = factor * 2**n, full jitter).
    retry_backoff_factor: float = 0.5
    # Upper bound on total retry time for one call.
    retry_max_time_seconds: float = 30.0

    # -------------------------------------------------------------------------
    # Metadata Fallback
    # score = w_title * shared_title_words + w_creator * same_creator + w_publisher * same_publisher
    # -------------------------------------------------------------------------

    weight_title_word: float = 3.0
    weight_creator: float = 5.0
    weight_publisher: float = 2.0

    # -------------------------------------------------------------------------
    # Weekly Pick
    # -------------------------------------------------------------------------

    # Availability flag checked first (e.g. borrowable right now).
    primary_collection: str = "utokyo"
    # Availability flag checked when no item has the primary flag.
    secondary_collection: str = "sophia"

    @model_validator(mode="after")
    def positive_bounds(self):
        if self.candidate_cap < 1:
            raise ValueError(f"candidate_cap must be >= 1, got {self.candidate_cap}")
        if self.max_key_terms < 1:
            raise ValueError(f"max_key_terms must be >= 1, got {self.max_key_terms}")
        if self.retry_max_tries < 1:
            raise ValueError(f"retry_max_tries must be >= 1, got {self.retry_max_tries}")
        if self.embedding_timeout_seconds <= 0:
            raise ValueError("embedding_timeout_seconds must be positive")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RecommendationConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        for section in ("candidate_pool", "lexical", "semantic", "retry"):
            if section in config_dict:
                flat.update(config_dict[section])
        if "metadata_weights" in config_dict:
            mw = config_dict["metadata_weights"]
            if "title_word" in mw:
                flat["weight_title_word"] = mw["title_word"]
            if "creator" in mw:
                flat["weight_creator"] = mw["creator"]
            if "publisher" in mw:
                flat["weight_publisher"] = mw["publisher"]
        if "weekly" in config_dict:
            wk = config_dict["weekly"]
            if "primary_collection" in wk:
                flat["primary_collection"] = wk["primary_collection"]
            if "secondary_collection" in wk:
                flat["secondary_collection"] = wk["secondary_collection"]
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = RecommendationConfig()


def resolve_config(config: Optional["RecommendationConfig"]) -> "RecommendationConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
