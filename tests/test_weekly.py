"""Weekly pick: determinism within a week, rotation across weeks, collection tiers."""

import pytest

from recommender.errors import NotFoundError, StoreError
from recommender.models.config import RecommendationConfig
from recommender.models.item import Partition
from recommender.stages.weekly import WEEK_MS, WeeklySelector, candidate_tiers, week_number
from server.services.catalog_store import InMemoryCatalogStore

from .conftest import FAST_CONFIG, FlakyStore, make_item

WEEK_SECONDS = WEEK_MS / 1000


def _selector(items, now, config=FAST_CONFIG):
    return WeeklySelector(InMemoryCatalogStore(items), config, clock=lambda: now)


class TestWeekNumber:
    def test_epoch_is_week_zero(self):
        assert week_number(0) == 0
        assert week_number(WEEK_SECONDS - 1) == 0
        assert week_number(WEEK_SECONDS) == 1


class TestCandidateTiers:
    def test_tiers_sorted_by_title(self):
        items = [
            make_item("1", "Zeta", utokyo=True),
            make_item("2", "Alpha", utokyo=True),
            make_item("3", "Beta", sophia=True),
        ]
        tiers = candidate_tiers(items, FAST_CONFIG)
        assert [name for name, _ in tiers] == ["utokyo", "sophia", "all"]
        assert [i.id for i in tiers[0][1]] == ["2", "1"]
        assert [i.id for i in tiers[1][1]] == ["3"]
        assert [i.id for i in tiers[2][1]] == ["2", "3", "1"]


class TestWeeklySelector:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.primary = [make_item(f"u{i}", f"Primary {i}", utokyo=True) for i in range(3)]
        self.secondary = [make_item("s1", "Secondary", sophia=True, partition=Partition.STACKED)]
        self.other = [make_item("n1", "Nowhere")]

    async def test_same_pick_all_week(self):
        items = self.primary + self.secondary + self.other
        start = 100 * WEEK_SECONDS
        first = await _selector(items, start).get_weekly_pick()
        later = await _selector(items, start + WEEK_SECONDS - 1).get_weekly_pick()
        assert first == later

    async def test_pick_rotates_across_weeks(self):
        items = self.primary + self.other
        picks = [
            (await _selector(items, week * WEEK_SECONDS).get_weekly_pick()).id
            for week in range(100, 103)
        ]
        assert len(set(picks)) == 3
        assert set(picks) == {"u0", "u1", "u2"}

    async def test_index_is_week_modulo_tier_size(self):
        week = 100
        pick = await _selector(self.primary, week * WEEK_SECONDS).get_weekly_pick()
        assert pick.id == f"u{week % 3}"

    async def test_primary_collection_preferred(self):
        items = self.other + self.secondary + self.primary
        for week in range(5):
            pick = await _selector(items, week * WEEK_SECONDS).get_weekly_pick()
            assert pick.is_available_in("utokyo")

    async def test_secondary_when_no_primary(self):
        pick = await _selector(self.secondary + self.other, 7 * WEEK_SECONDS).get_weekly_pick()
        assert pick.id == "s1"

    async def test_any_item_when_no_holdings(self):
        pick = await _selector(self.other, 0).get_weekly_pick()
        assert pick.id == "n1"

    async def test_collections_are_configurable(self):
        config = RecommendationConfig(retry_backoff_factor=0.0, primary_collection="sophia")
        pick = await _selector(self.primary + self.secondary, 0, config).get_weekly_pick()
        assert pick.id == "s1"

    async def test_empty_catalog(self):
        with pytest.raises(NotFoundError):
            await _selector([], 0).get_weekly_pick()

    async def test_store_failure(self):
        selector = WeeklySelector(FlakyStore(self.primary), FAST_CONFIG, clock=lambda: 0)
        with pytest.raises(StoreError):
            await selector.get_weekly_pick()

    async def test_primary_found_in_stacked_partition(self):
        stacked_primary = [
            make_item("sp2", "Stacked Primary B", utokyo=True, partition=Partition.STACKED),
            make_item("sp1", "Stacked Primary A", utokyo=True, partition=Partition.STACKED),
        ]
        wish_only = [
            make_item("w1", "Alpha", sophia=True),
            make_item("w2", "Beta"),
        ]
        items = wish_only + stacked_primary
        picks = [
            (await _selector(items, week * WEEK_SECONDS).get_weekly_pick()).id
            for week in (10, 11)
        ]
        assert picks == ["sp1", "sp2"]
