"""Book listing, lookup and search endpoints."""

from fastapi import APIRouter

from recommender.models.item import Partition

from ..models import BookCard, PaginatedBooks
from ..services.book_service import DEFAULT_PAGE_SIZE
from ..state import get_state

router = APIRouter()


@router.get("/books", response_model=PaginatedBooks)
async def list_books(type: str = "wish", page: int = 1, limit: int = DEFAULT_PAGE_SIZE):
    """List books of one backlog, paginated in storage order."""
    state = get_state()
    result = await state.book_service.list_books(Partition.parse(type), page=page, limit=limit)
    return PaginatedBooks.from_result(result)


@router.get("/books/search", response_model=PaginatedBooks)
async def search_books(q: str = "", type: str = "wish", page: int = 1, limit: int = DEFAULT_PAGE_SIZE):
    """Keyword search, re-ranked by embedding similarity when available."""
    state = get_state()
    result = await state.book_service.search_books(Partition.parse(type), q, page=page, limit=limit)
    return PaginatedBooks.from_result(result)


@router.get("/book", response_model=BookCard)
async def get_book(url: str = "", type: str = "wish"):
    state = get_state()
    item = await state.book_service.get_book(Partition.parse(type), url)
    return BookCard.from_item(item)
