"""
Shared fixtures and fakes for recommender and server tests.

Fakes implement the CatalogStore / EmbeddingProvider / EmbeddingCache protocols
in memory. Nothing here touches the network.
"""

import asyncio
import hashlib
from typing import Dict, Iterable, List, Optional

import pytest

from recommender.models.config import RecommendationConfig
from recommender.models.item import CatalogItem, Partition
from server.services.catalog_store import InMemoryCatalogStore
from server.services.embedding_cache import InMemoryEmbeddingCache


# No waiting between retries in tests
FAST_CONFIG = RecommendationConfig(
    retry_max_tries=2,
    retry_backoff_factor=0.0,
    retry_max_time_seconds=5.0,
    embedding_timeout_seconds=1.0,
)


def make_item(
    item_id: str,
    title: str = "",
    creator: str = "",
    publisher: str = "",
    text: Optional[str] = None,
    partition: Partition = Partition.WISH,
    utokyo: bool = False,
    sophia: bool = False,
    published_date: str = "",
) -> CatalogItem:
    return CatalogItem(
        id=item_id,
        title=title,
        creator=creator,
        publisher=publisher,
        published_date=published_date,
        descriptive_text=text,
        partition=partition,
        availability={"utokyo": utokyo, "sophia": sophia},
    )


class FlakyStore(InMemoryCatalogStore):
    """In-memory store whose calls fail the first ``failures`` times (or always)."""

    def __init__(self, items: Iterable[CatalogItem] = (), failures: Optional[int] = None):
        super().__init__(items)
        self.failures = failures
        self.calls = 0

    def _maybe_fail(self):
        self.calls += 1
        if self.failures is None or self.calls <= self.failures:
            raise ConnectionError("database unavailable")

    async def list_items(self, partition):
        self._maybe_fail()
        return await super().list_items(partition)

    async def get_item(self, item_id, partition):
        self._maybe_fail()
        return await super().get_item(item_id, partition)

    async def list_all(self):
        self._maybe_fail()
        return await super().list_all()


class ScriptedProvider:
    """
    EmbeddingProvider returning a fixed vector per text.

    Texts listed in ``vectors`` get that vector; other texts get a deterministic
    hash vector unless ``fail_all`` is set or the text is in ``fail_texts``.
    """

    def __init__(
        self,
        vectors: Optional[Dict[str, List[float]]] = None,
        fail_texts: Iterable[str] = (),
        fail_all: bool = False,
        dims: int = 8,
    ):
        self.vectors = dict(vectors or {})
        self.fail_texts = set(fail_texts)
        self.fail_all = fail_all
        self.dims = dims
        self.calls: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.fail_all or text in self.fail_texts:
            raise ConnectionError("embedding service unavailable")
        if text in self.vectors:
            return list(self.vectors[text])
        digest = hashlib.sha256(text.encode()).digest()
        return [b / 255.0 for b in digest[: self.dims]]


class SlowProvider(ScriptedProvider):
    """ScriptedProvider that sleeps ``delay`` seconds before answering texts in ``slow_texts``."""

    def __init__(self, slow_texts: Iterable[str], delay: float = 1.0, **kwargs):
        super().__init__(**kwargs)
        self.slow_texts = set(slow_texts)
        self.delay = delay

    async def embed(self, text: str) -> List[float]:
        if text in self.slow_texts:
            await asyncio.sleep(self.delay)
        return await super().embed(text)


class BrokenCache:
    """EmbeddingCache whose reads and writes always fail."""

    async def get(self, item_id):
        raise IOError("cache read failed")

    async def put(self, item_id, vector):
        raise IOError("cache write failed")

    async def stats(self):
        return {"count": 0}

    async def clear(self):
        pass

    async def evict_expired(self, max_age_seconds=None):
        return 0

    async def flush(self):
        raise IOError("cache flush failed")


@pytest.fixture
def fast_config() -> RecommendationConfig:
    return FAST_CONFIG


@pytest.fixture
def memory_cache() -> InMemoryEmbeddingCache:
    return InMemoryEmbeddingCache()


@pytest.fixture
def catalog_items() -> List[CatalogItem]:
    """A small mixed catalog across both partitions."""
    return [
        make_item(
            "w1", "Deep Learning Basics", "Ito", "Ohmsha",
            text="Neural networks and deep learning for image recognition.",
            utokyo=True, published_date="2019-04-01",
        ),
        make_item(
            "w2", "Neural Networks in Practice", "Sato", "Ohmsha",
            text="Practical neural networks: training deep models and image classifiers.",
            sophia=True, published_date="2021",
        ),
        make_item(
            "w3", "The History of Rome", "Gibbon", "Penguin",
            text="A sweeping history of the Roman empire and its decline.",
            published_date="March 1998",
        ),
        make_item("w4", "Deep Learning Advanced", "Ito", "Springer", utokyo=True, sophia=True),
        make_item(
            "s1", "Stacked Statistics", "Tanaka", "Kyoritsu",
            text="Bayesian statistics for practitioners.",
            partition=Partition.STACKED, sophia=True,
        ),
    ]


@pytest.fixture
def store(catalog_items) -> InMemoryCatalogStore:
    return InMemoryCatalogStore(catalog_items)
