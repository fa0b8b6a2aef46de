"""
Candidate Pool

Loads the reference item and the items it is compared against.
Every store call goes through resilient_call; a store failure that survives
the retries is raised as StoreError.

The public entry points are load_reference, get_candidate_pool and get_text_candidates.
"""

from typing import Awaitable, Callable, List, TypeVar

from ..errors import NotFoundError, RecommenderError, StoreError
from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.item import CatalogItem, Partition
from ..ports import CatalogStore
from ..utils.resilience import resilient_call, retry_options

T = TypeVar("T")


async def store_call(
    func: Callable[..., Awaitable[T]],
    *args,
    config: RecommendationConfig = DEFAULT_CONFIG,
    label: str = "store",
) -> T:
    """Run a store coroutine with retries; non-application errors become StoreError."""
    try:
        return await resilient_call(func, *args, label=label, **retry_options(config))
    except RecommenderError:
        raise
    except Exception as e:
        raise StoreError(f"{label} failed: {e!r}") from e


async def load_reference(
    store: CatalogStore,
    item_id: str,
    partition: Partition,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> CatalogItem:
    """The reference item, or NotFoundError when it is not in ``partition``."""
    item = await store_call(store.get_item, item_id, partition, config=config, label="get_item")
    if item is None:
        raise NotFoundError(f"Item {item_id!r} not found in {partition.value}")
    return item


def _exclude_and_cap(
    items: List[CatalogItem],
    reference: CatalogItem,
    config: RecommendationConfig,
) -> List[CatalogItem]:
    """Drop the reference and keep the first candidate_cap items, storage order preserved."""
    return [item for item in items if item.id != reference.id][: config.candidate_cap]


async def get_candidate_pool(
    store: CatalogStore,
    reference: CatalogItem,
    partition: Partition,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> List[CatalogItem]:
    """All items of ``partition`` except the reference, capped at candidate_cap."""
    items = await store_call(store.list_items, partition, config=config, label="list_items")
    return _exclude_and_cap(items, reference, config)


async def get_text_candidates(
    store: CatalogStore,
    reference: CatalogItem,
    partition: Partition,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> List[CatalogItem]:
    """Items with a description, excluding the reference, capped at candidate_cap."""
    items = await store_call(
        store.list_items_with_text,
        partition,
        reference.id,
        config.candidate_cap,
        config=config,
        label="list_items_with_text",
    )
    return [item for item in _exclude_and_cap(items, reference, config) if item.has_text]
