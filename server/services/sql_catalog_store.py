"""
SQL Catalog Store

Reads the wish/stacked tables through SQLAlchemy Core. Queries are blocking,
so each call runs in a worker thread via asyncio.to_thread.
Used when CATALOG_SOURCE=sql; connection string comes from DATABASE_URL.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from recommender.models.item import CatalogItem, Partition

from ..schema.book_schema_adapter import to_catalog_item

logger = logging.getLogger(__name__)

# Table names are fixed by Partition; never interpolate user input here.
_TABLES = {partition: partition.value for partition in Partition}

_HAS_TEXT = "description IS NOT NULL AND TRIM(description) != ''"


class SqlCatalogStore:
    """CatalogStore over a relational database with one table per partition."""

    def __init__(self, database_url: str, engine: Optional[Engine] = None):
        connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
        self._engine = engine or create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)

    @property
    def engine(self) -> Engine:
        return self._engine

    def _fetch(self, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        with self._engine.connect() as conn:
            result = conn.execute(text(sql), params or {})
            return [dict(row) for row in result.mappings()]

    def _rows_to_items(self, rows: List[Dict[str, Any]], partition: Partition) -> List[CatalogItem]:
        return [to_catalog_item(row, partition) for row in rows]

    async def list_items(self, partition: Partition) -> List[CatalogItem]:
        rows = await asyncio.to_thread(self._fetch, f"SELECT * FROM {_TABLES[partition]}")
        return self._rows_to_items(rows, partition)

    async def get_item(self, item_id: str, partition: Partition) -> Optional[CatalogItem]:
        rows = await asyncio.to_thread(
            self._fetch,
            f"SELECT * FROM {_TABLES[partition]} WHERE bookmeter_url = :id LIMIT 1",
            {"id": item_id},
        )
        return to_catalog_item(rows[0], partition) if rows else None

    async def list_items_with_text(
        self,
        partition: Partition,
        exclude_id: str,
        cap: int,
    ) -> List[CatalogItem]:
        rows = await asyncio.to_thread(
            self._fetch,
            f"SELECT * FROM {_TABLES[partition]} WHERE bookmeter_url != :id AND {_HAS_TEXT} LIMIT :cap",
            {"id": exclude_id, "cap": max(cap, 0)},
        )
        return self._rows_to_items(rows, partition)

    async def list_all(self) -> List[CatalogItem]:
        items: List[CatalogItem] = []
        for partition in Partition:
            items.extend(await self.list_items(partition))
        logger.debug("[sql] list_all loaded %d rows", len(items))
        return items
