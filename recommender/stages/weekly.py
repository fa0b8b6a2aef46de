"""
Weekly pick — one recommendation per calendar week, no persisted state.

Candidates are tiered by what the reader can act on right now:
  a. held by the primary collection, sorted by title
  b. held by the secondary collection, sorted by title
  c. everything, sorted by title
The first non-empty tier is indexed with week_number % len(tier). The pick is
stable for a whole week and repeats every len(tier) weeks when the catalog is
unchanged. It is a reproducible hash, not a random draw.
"""

import logging
import time
from typing import Callable, List, Optional, Tuple

from ..errors import NotFoundError
from ..models.config import RecommendationConfig, resolve_config
from ..models.item import CatalogItem
from ..ports import CatalogStore
from .candidate_pool import store_call

logger = logging.getLogger(__name__)

WEEK_MS = 7 * 24 * 60 * 60 * 1000


def week_number(now_seconds: float) -> int:
    """Whole weeks since the Unix epoch."""
    return int(now_seconds * 1000) // WEEK_MS


def _by_title(items: List[CatalogItem]) -> List[CatalogItem]:
    # id breaks title ties so the order is total
    return sorted(items, key=lambda item: (item.title, item.id))


def candidate_tiers(
    items: List[CatalogItem],
    config: RecommendationConfig,
) -> List[Tuple[str, List[CatalogItem]]]:
    """The three tiers in priority order, each sorted by title."""
    primary = [i for i in items if i.is_available_in(config.primary_collection)]
    secondary = [i for i in items if i.is_available_in(config.secondary_collection)]
    return [
        (config.primary_collection, _by_title(primary)),
        (config.secondary_collection, _by_title(secondary)),
        ("all", _by_title(items)),
    ]


class WeeklySelector:
    """
    Picks the weekly recommendation from every partition of the catalog.

    ``clock`` returns epoch seconds (time.time by default) and is injectable for tests.
    """

    def __init__(
        self,
        store: CatalogStore,
        config: Optional[RecommendationConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._store = store
        self._config = resolve_config(config)
        self._clock = clock

    async def get_weekly_pick(self) -> CatalogItem:
        """
        This week's pick.

        Raises:
            NotFoundError: the catalog is empty.
            StoreError: the catalog could not be read.
        """
        week = week_number(self._clock())
        items = await store_call(self._store.list_all, config=self._config, label="list_all")

        for tier_name, candidates in candidate_tiers(items, self._config):
            logger.debug("[weekly] tier=%s candidates=%d", tier_name, len(candidates))
            if not candidates:
                continue
            index = week % len(candidates)
            pick = candidates[index]
            logger.info(
                "[weekly] week=%d tier=%s index=%d/%d pick=%s",
                week, tier_name, index, len(candidates), pick.id,
            )
            return pick

        raise NotFoundError("No books to recommend")
