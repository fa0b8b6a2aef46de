"""
Catalog item model — typed representation of a book for the recommendation pipeline.

Used by the ranking engines, the orchestrator and the weekly selector instead of raw rows.
Store implementations build these through the schema adapter, so the core only ever
sees strict booleans in ``availability``.
"""

from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import ValidationError


class Partition(str, Enum):
    """Backlog an item belongs to."""

    WISH = "wish"  # want-to-read
    STACKED = "stacked"  # owned but unread

    @classmethod
    def parse(cls, value: Union[str, "Partition"]) -> "Partition":
        """Coerce a tag (e.g. a query parameter) to a Partition or raise ValidationError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Invalid partition: {value!r}") from None


class CatalogItem(BaseModel):
    """
    A book in one of the backlogs.

    ``id`` is the source URL and is unique across both partitions.
    ``availability`` maps a library collection name to whether that library holds the book.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    creator: str = ""
    publisher: str = ""
    published_date: str = ""
    availability: Dict[str, bool] = Field(default_factory=dict)
    descriptive_text: Optional[str] = None
    partition: Partition = Partition.WISH
    isbn: str = ""
    links: Dict[str, str] = Field(default_factory=dict)

    @field_validator("title", "creator", "publisher", "published_date", "isbn", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("availability", mode="before")
    @classmethod
    def _absent_flags_false(cls, v: Any) -> Any:
        if not v:
            return {}
        return {str(k): False if flag is None else flag for k, flag in dict(v).items()}

    @property
    def has_text(self) -> bool:
        """True when the item has a non-blank description."""
        return bool(self.descriptive_text and self.descriptive_text.strip())

    def is_available_in(self, collection: str) -> bool:
        """Availability flag for a collection; unknown collections are False."""
        return self.availability.get(collection, False)
