"""Statistics response models."""

from typing import List

from pydantic import BaseModel


class PublisherCount(BaseModel):
    publisher: str
    count: int


class AuthorCount(BaseModel):
    author: str
    count: int


class YearCount(BaseModel):
    year: str
    count: int


class LibraryCount(BaseModel):
    library: str
    count: int


class EmbeddingCacheStats(BaseModel):
    count: int
    valid: int
    expired: int
    ttl_seconds: float
