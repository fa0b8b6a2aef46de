"""
Catalog Store implementations.

Supplies wish/stacked books to the recommender as CatalogItem. Implementations:
in-memory (tests, fixtures), JSON file (local), SQL (server/services/sql_catalog_store.py).
Swap via CATALOG_SOURCE.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from recommender.models.item import CatalogItem, Partition

from ..schema.book_schema_adapter import to_catalog_item


class InMemoryCatalogStore:
    """
    Catalog store over already-normalized items, kept in insertion order per partition.
    """

    def __init__(self, items: Optional[Iterable[CatalogItem]] = None):
        self._items: Dict[Partition, List[CatalogItem]] = {p: [] for p in Partition}
        for item in items or []:
            self._items[item.partition].append(item)

    @classmethod
    def from_rows(cls, rows_by_partition: Mapping[str, List[Mapping[str, Any]]]) -> "InMemoryCatalogStore":
        """Build from raw rows keyed by partition name ("wish" / "stacked")."""
        items: List[CatalogItem] = []
        for name, rows in rows_by_partition.items():
            partition = Partition.parse(name)
            items.extend(to_catalog_item(row, partition) for row in rows)
        return cls(items)

    async def list_items(self, partition: Partition) -> List[CatalogItem]:
        return list(self._items[partition])

    async def get_item(self, item_id: str, partition: Partition) -> Optional[CatalogItem]:
        for item in self._items[partition]:
            if item.id == item_id:
                return item
        return None

    async def list_items_with_text(
        self,
        partition: Partition,
        exclude_id: str,
        cap: int,
    ) -> List[CatalogItem]:
        matches = [item for item in self._items[partition] if item.has_text and item.id != exclude_id]
        return matches[: max(cap, 0)]

    async def list_all(self) -> List[CatalogItem]:
        return [item for partition in Partition for item in self._items[partition]]


class JsonCatalogStore(InMemoryCatalogStore):
    """
    Catalog store backed by one JSON file: {"wish": [...rows], "stacked": [...rows]}.
    Used when CATALOG_SOURCE=json; path comes from CATALOG_JSON_PATH.
    Rows may be in storage format ('Yes'/'No' flags) or already normalized.
    """

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        if not self._path.exists():
            raise FileNotFoundError(f"Catalog JSON not found: {self._path}")
        with open(self._path, encoding="utf-8") as f:
            data = json.load(f)
        items: List[CatalogItem] = []
        for partition in Partition:
            items.extend(to_catalog_item(row, partition) for row in data.get(partition.value, []))
        super().__init__(items)

    @property
    def path(self) -> Path:
        return self._path
