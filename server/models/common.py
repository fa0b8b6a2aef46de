"""Common Pydantic models shared across routes."""

from typing import Dict, List, Optional

from pydantic import BaseModel

from recommender.models.item import CatalogItem

from ..services.book_service import PaginatedResult


class BookCard(BaseModel):
    id: str
    title: str
    creator: str = ""
    publisher: str = ""
    published_date: str = ""
    isbn: str = ""
    description: Optional[str] = None
    type: str
    availability: Dict[str, bool] = {}
    links: Dict[str, str] = {}

    @classmethod
    def from_item(cls, item: CatalogItem) -> "BookCard":
        return cls(
            id=item.id,
            title=item.title,
            creator=item.creator,
            publisher=item.publisher,
            published_date=item.published_date,
            isbn=item.isbn,
            description=item.descriptive_text,
            type=item.partition.value,
            availability=dict(item.availability),
            links=dict(item.links),
        )


class PaginatedBooks(BaseModel):
    items: List[BookCard]
    total_items: int
    total_pages: int
    current_page: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_result(cls, result: PaginatedResult) -> "PaginatedBooks":
        return cls(
            items=[BookCard.from_item(item) for item in result.items],
            total_items=result.total_items,
            total_pages=result.total_pages,
            current_page=result.current_page,
            has_next_page=result.has_next_page,
            has_prev_page=result.has_prev_page,
        )


class SimilarBooksResponse(BaseModel):
    reference_id: str
    type: str
    engine_semantic_enabled: bool
    items: List[BookCard]


class ErrorDetail(BaseModel):
    code: str
    message: str
    request_id: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
    status: int
