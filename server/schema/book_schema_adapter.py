"""
Book schema adapter: convert storage rows → recommender CatalogItem.

Supports:
- Storage format (the wish/stacked tables): bookmeter_url, book_title, author,
  exist_in_UTokyo / exist_in_Sophia as 'Yes'/'No', *_opac links, description.
- Recommender format: pass-through (id, title, creator, availability, ...).

'Yes'/'No' flags stop here. Anything other than 'Yes' (including a missing
column or NULL) becomes False.
"""

from typing import Any, Mapping

from recommender.models.item import CatalogItem, Partition

# Storage column -> availability key
AVAILABILITY_COLUMNS = {
    "exist_in_UTokyo": "utokyo",
    "exist_in_Sophia": "sophia",
}

# Storage column -> links key
LINK_COLUMNS = {
    "utokyo_opac": "utokyo",
    "sophia_opac": "sophia",
    "sophia_mathlib_opac": "sophia_mathlib",
}


def is_storage_format_row(row: Mapping[str, Any]) -> bool:
    """Detect if a row uses the storage schema."""
    return "bookmeter_url" in row or "book_title" in row


def parse_flag(value: Any) -> bool:
    """'Yes' -> True; 'No', empty, NULL or anything else -> False. Real booleans pass through."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "yes"
    return False


def _storage_to_item(row: Mapping[str, Any], partition: Partition) -> CatalogItem:
    availability = {key: parse_flag(row.get(column)) for column, key in AVAILABILITY_COLUMNS.items()}
    links = {key: row[column] for column, key in LINK_COLUMNS.items() if row.get(column)}
    description = row.get("description")
    return CatalogItem(
        id=row.get("bookmeter_url") or "",
        title=row.get("book_title") or "",
        creator=row.get("author") or "",
        publisher=row.get("publisher") or "",
        published_date=row.get("published_date") or "",
        availability=availability,
        descriptive_text=description if description else None,
        partition=partition,
        isbn=row.get("isbn_or_asin") or "",
        links=links,
    )


def to_catalog_item(row: Mapping[str, Any], partition: Partition) -> CatalogItem:
    """
    Convert any book row to a CatalogItem in ``partition``.

    Storage rows are mapped column by column; recommender-format rows are validated
    as-is with the partition forced to the one they were read from.
    """
    if is_storage_format_row(row):
        return _storage_to_item(row, partition)
    data = dict(row)
    data["partition"] = partition
    data["availability"] = {k: parse_flag(v) for k, v in (data.get("availability") or {}).items()}
    return CatalogItem.model_validate(data)
