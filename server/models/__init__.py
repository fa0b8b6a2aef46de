"""Pydantic request/response models for the API."""

from .common import BookCard, ErrorDetail, ErrorResponse, PaginatedBooks, SimilarBooksResponse
from .stats import AuthorCount, EmbeddingCacheStats, LibraryCount, PublisherCount, YearCount

__all__ = [
    "BookCard",
    "ErrorDetail",
    "ErrorResponse",
    "PaginatedBooks",
    "SimilarBooksResponse",
    "AuthorCount",
    "EmbeddingCacheStats",
    "LibraryCount",
    "PublisherCount",
    "YearCount",
]
