"""Statistics endpoints."""

from typing import List

from fastapi import APIRouter

from recommender.models.item import Partition

from ..models import AuthorCount, LibraryCount, PublisherCount, YearCount
from ..state import get_state

router = APIRouter()


@router.get("/publishers", response_model=List[PublisherCount])
async def publisher_distribution(type: str = "wish"):
    return await get_state().statistics_service.publisher_distribution(Partition.parse(type))


@router.get("/authors", response_model=List[AuthorCount])
async def author_distribution(type: str = "wish"):
    """Top authors by number of books."""
    return await get_state().statistics_service.author_distribution(Partition.parse(type))


@router.get("/years", response_model=List[YearCount])
async def year_distribution(type: str = "wish"):
    return await get_state().statistics_service.year_distribution(Partition.parse(type))


@router.get("/libraries", response_model=List[LibraryCount])
async def library_distribution(type: str = "wish"):
    """Holdings across the two university libraries."""
    return await get_state().statistics_service.library_distribution(Partition.parse(type))
