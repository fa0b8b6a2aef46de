"""
Error kinds raised by the recommender core.

Every error carries a stable ``code`` and the HTTP ``status`` the API layer
should answer with. ProviderError never escapes the orchestrator; the others
reach the caller.
"""

from typing import Any, Optional


class RecommenderError(Exception):
    """Base class for application errors."""

    code = "INTERNAL_ERROR"
    status = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(RecommenderError):
    """Caller supplied a structurally invalid argument."""

    code = "VALIDATION_ERROR"
    status = 400


class NotFoundError(RecommenderError):
    """Requested item does not exist, or there is nothing to recommend."""

    code = "NOT_FOUND"
    status = 404


class ProviderError(RecommenderError):
    """Embedding provider failed or timed out."""

    code = "PROVIDER_ERROR"
    status = 502


class StoreError(RecommenderError):
    """Catalog lookup failed at the storage boundary."""

    code = "STORE_ERROR"
    status = 500
