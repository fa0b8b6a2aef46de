"""Shared utilities for similarity and resilient external calls."""

from .resilience import resilient_call, retry_options
from .similarity import cosine_similarity

__all__ = [
    "cosine_similarity",
    "resilient_call",
    "retry_options",
]
