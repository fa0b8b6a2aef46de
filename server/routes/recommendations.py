"""Recommendation endpoints: weekly pick, similar books, pick by author or publisher."""

from fastapi import APIRouter

from recommender.models.item import Partition

from ..models import BookCard, SimilarBooksResponse
from ..state import get_state

router = APIRouter()


@router.get("/weekly", response_model=BookCard)
async def weekly_pick():
    """This week's recommendation; the same book all week."""
    state = get_state()
    item = await state.weekly_selector.get_weekly_pick()
    return BookCard.from_item(item)


@router.get("/similar", response_model=SimilarBooksResponse)
async def similar_books(url: str = "", type: str = "wish", limit: int = 5):
    """Books similar to ``url`` within the same backlog."""
    state = get_state()
    items = await state.orchestrator.find_similar(url, type, limit)
    return SimilarBooksResponse(
        reference_id=url,
        type=Partition.parse(type).value,
        engine_semantic_enabled=state.semantic_enabled,
        items=[BookCard.from_item(item) for item in items],
    )


@router.get("/recommend-by-genre", response_model=BookCard)
async def recommend_by_genre(type: str = "wish", genre_type: str = "", genre_value: str = ""):
    """Random book sharing an author or publisher."""
    state = get_state()
    item = await state.book_service.recommend_by_genre(Partition.parse(type), genre_type, genre_value)
    return BookCard.from_item(item)
