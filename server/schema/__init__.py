"""Schema adapters for converting between data formats."""

from .book_schema_adapter import (
    is_storage_format_row,
    parse_flag,
    to_catalog_item,
)

__all__ = [
    "is_storage_format_row",
    "parse_flag",
    "to_catalog_item",
]
