"""Reading statistics: distributions by publisher, author, year and library holdings."""

import re
from collections import Counter
from typing import Dict, List

from recommender.models.config import DEFAULT_CONFIG, RecommendationConfig
from recommender.models.item import CatalogItem, Partition
from recommender.ports import CatalogStore
from recommender.stages.candidate_pool import store_call

TOP_AUTHORS = 20
UNKNOWN_YEAR = "Unknown"

# Display names for known collections; others are shown as configured
COLLECTION_LABELS = {"utokyo": "UTokyo", "sophia": "Sophia"}

_YEAR = re.compile(r"\d{4}")


def extract_year(published_date: str) -> str:
    """Leading four digits, else trailing four digits, else "Unknown"."""
    if _YEAR.fullmatch(published_date[:4]):
        return published_date[:4]
    if len(published_date) >= 4 and _YEAR.fullmatch(published_date[-4:]):
        return published_date[-4:]
    return UNKNOWN_YEAR


def collection_label(collection: str) -> str:
    return COLLECTION_LABELS.get(collection, collection)


def library_category(item: CatalogItem, primary: str = "utokyo", secondary: str = "sophia") -> str:
    """Which of the two collections hold the item: one label, "Both" or "None"."""
    in_primary = item.is_available_in(primary)
    in_secondary = item.is_available_in(secondary)
    if in_primary and in_secondary:
        return "Both"
    if in_primary:
        return collection_label(primary)
    if in_secondary:
        return collection_label(secondary)
    return "None"


def _counts(values: List[str], key: str) -> List[Dict]:
    """Value counts, most frequent first, ties by value."""
    counts = Counter(values)
    return [{key: value, "count": counts[value]} for value in sorted(counts, key=lambda v: (-counts[v], v))]


class StatisticsService:
    """Aggregates over one partition of the catalog."""

    def __init__(self, store: CatalogStore, config: RecommendationConfig = DEFAULT_CONFIG):
        self.store = store
        self.config = config

    async def _items(self, partition: Partition) -> List[CatalogItem]:
        return await store_call(self.store.list_items, partition, config=self.config, label="list_items")

    async def publisher_distribution(self, partition: Partition) -> List[Dict]:
        items = await self._items(partition)
        return _counts([i.publisher for i in items if i.publisher], "publisher")

    async def author_distribution(self, partition: Partition) -> List[Dict]:
        items = await self._items(partition)
        return _counts([i.creator for i in items if i.creator], "author")[:TOP_AUTHORS]

    async def year_distribution(self, partition: Partition) -> List[Dict]:
        """Counts per year, newest first ("Unknown" sorts ahead of the years)."""
        items = await self._items(partition)
        years = Counter(extract_year(i.published_date) for i in items if i.published_date)
        return [{"year": year, "count": years[year]} for year in sorted(years, reverse=True)]

    async def library_distribution(self, partition: Partition) -> List[Dict]:
        """Counts for every library category, including empty ones, in fixed order."""
        items = await self._items(partition)
        primary, secondary = self.config.primary_collection, self.config.secondary_collection
        counts = Counter(library_category(i, primary, secondary) for i in items)
        categories = (collection_label(primary), collection_label(secondary), "Both", "None")
        return [{"library": category, "count": counts.get(category, 0)} for category in categories]
