"""Book browsing, search, genre picks and statistics."""

import random

import pytest

from recommender.errors import NotFoundError, ValidationError
from recommender.models.item import Partition
from recommender.stages.ranking.semantic import EmbeddingResolver
from server.services.book_service import BookService, PaginatedResult
from server.services.catalog_store import InMemoryCatalogStore
from server.services.embedding_cache import InMemoryEmbeddingCache
from server.services.statistics_service import StatisticsService, extract_year

from .conftest import FAST_CONFIG, ScriptedProvider, make_item


class TestPaginatedResult:
    def test_pages(self):
        items = [make_item(str(i)) for i in range(25)]
        page = PaginatedResult.from_items(items, page=3, limit=10)
        assert [i.id for i in page.items] == [str(i) for i in range(20, 25)]
        assert page.total_items == 25
        assert page.total_pages == 3
        assert not page.has_next_page
        assert page.has_prev_page

    def test_empty(self):
        page = PaginatedResult.from_items([], page=1, limit=10)
        assert page.total_pages == 0
        assert not page.has_next_page


class TestBookService:
    @pytest.fixture(autouse=True)
    def setup(self, store):
        self.store = store
        self.service = BookService(store, config=FAST_CONFIG, rng=random.Random(0))

    async def test_list_books(self):
        page = await self.service.list_books(Partition.WISH, page=1, limit=2)
        assert [i.id for i in page.items] == ["w1", "w2"]
        assert page.total_items == 4
        assert page.has_next_page

    @pytest.mark.parametrize("page, limit", [(0, 10), (1, 0), (1, 1000)])
    async def test_list_books_rejects_bad_pagination(self, page, limit):
        with pytest.raises(ValidationError):
            await self.service.list_books(Partition.WISH, page=page, limit=limit)

    async def test_get_book(self):
        assert (await self.service.get_book(Partition.WISH, "w3")).title == "The History of Rome"
        with pytest.raises(NotFoundError):
            await self.service.get_book(Partition.STACKED, "w3")
        with pytest.raises(ValidationError):
            await self.service.get_book(Partition.WISH, "")

    async def test_search_keyword_order_without_embeddings(self):
        page = await self.service.search_books(Partition.WISH, "deep")
        # w1 and w4 by title, w2 by description
        assert [i.id for i in page.items] == ["w1", "w2", "w4"]

    async def test_search_matches_author_and_publisher(self):
        assert [i.id for i in (await self.service.search_books(Partition.WISH, "gibbon")).items] == ["w3"]
        assert {i.id for i in (await self.service.search_books(Partition.WISH, "OHMSHA")).items} == {"w1", "w2"}

    async def test_search_ranked_by_embeddings(self):
        provider = ScriptedProvider({
            "deep": [1.0, 0.0],
            "Neural networks and deep learning for image recognition.": [0.0, 1.0],
            "Practical neural networks: training deep models and image classifiers.": [0.6, 0.8],
            "Deep Learning Advanced by Ito": [1.0, 0.1],
        })
        resolver = EmbeddingResolver(provider, InMemoryEmbeddingCache(), FAST_CONFIG)
        service = BookService(self.store, resolver, FAST_CONFIG)
        page = await service.search_books(Partition.WISH, "deep")
        assert [i.id for i in page.items] == ["w4", "w2", "w1"]

    async def test_search_falls_back_when_query_embedding_fails(self):
        resolver = EmbeddingResolver(ScriptedProvider(fail_all=True), None, FAST_CONFIG)
        service = BookService(self.store, resolver, FAST_CONFIG)
        page = await service.search_books(Partition.WISH, "deep")
        assert [i.id for i in page.items] == ["w1", "w2", "w4"]

    async def test_search_requires_query(self):
        with pytest.raises(ValidationError):
            await self.service.search_books(Partition.WISH, "   ")

    async def test_search_no_matches(self):
        page = await self.service.search_books(Partition.WISH, "zzzz")
        assert page.items == []
        assert page.total_items == 0

    async def test_recommend_by_author(self):
        pick = await self.service.recommend_by_genre(Partition.WISH, "author", "Ito")
        assert pick.id in {"w1", "w4"}

    async def test_recommend_by_publisher(self):
        pick = await self.service.recommend_by_genre(Partition.WISH, "publisher", "Penguin")
        assert pick.id == "w3"

    async def test_recommend_by_genre_errors(self):
        with pytest.raises(ValidationError):
            await self.service.recommend_by_genre(Partition.WISH, "series", "X")
        with pytest.raises(ValidationError):
            await self.service.recommend_by_genre(Partition.WISH, "author", "")
        with pytest.raises(NotFoundError):
            await self.service.recommend_by_genre(Partition.WISH, "author", "Nobody")


class TestExtractYear:
    @pytest.mark.parametrize("value, expected", [
        ("2019-04-01", "2019"),
        ("March 1998", "1998"),
        ("2021", "2021"),
        ("unknown", "Unknown"),
        ("99", "Unknown"),
    ])
    def test_extract_year(self, value, expected):
        assert extract_year(value) == expected


class TestStatisticsService:
    @pytest.fixture(autouse=True)
    def setup(self, store):
        self.service = StatisticsService(store, FAST_CONFIG)

    async def test_publishers(self):
        result = await self.service.publisher_distribution(Partition.WISH)
        assert result == [
            {"publisher": "Ohmsha", "count": 2},
            {"publisher": "Penguin", "count": 1},
            {"publisher": "Springer", "count": 1},
        ]

    async def test_authors_top_twenty(self):
        items = [make_item(str(i), creator=f"Author {i:02d}") for i in range(30)]
        service = StatisticsService(InMemoryCatalogStore(items), FAST_CONFIG)
        result = await service.author_distribution(Partition.WISH)
        assert len(result) == 20
        assert result[0] == {"author": "Author 00", "count": 1}

    async def test_years(self):
        result = await self.service.year_distribution(Partition.WISH)
        # w4 has no date and is skipped
        assert result == [
            {"year": "2021", "count": 1},
            {"year": "2019", "count": 1},
            {"year": "1998", "count": 1},
        ]

    async def test_libraries(self):
        result = await self.service.library_distribution(Partition.WISH)
        assert result == [
            {"library": "UTokyo", "count": 1},
            {"library": "Sophia", "count": 1},
            {"library": "Both", "count": 1},
            {"library": "None", "count": 1},
        ]

    async def test_libraries_empty_partition_lists_every_category(self):
        service = StatisticsService(InMemoryCatalogStore([]), FAST_CONFIG)
        result = await service.library_distribution(Partition.STACKED)
        assert [r["count"] for r in result] == [0, 0, 0, 0]
