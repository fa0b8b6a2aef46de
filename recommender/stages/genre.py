"""Random pick among books sharing an author or publisher."""

import random
from typing import List, Optional

from ..errors import NotFoundError, ValidationError
from ..models.item import CatalogItem

GENRE_FIELDS = {
    "author": "creator",
    "publisher": "publisher",
}


def pick_by_genre(
    items: List[CatalogItem],
    genre_type: str,
    genre_value: str,
    rng: Optional[random.Random] = None,
) -> CatalogItem:
    """
    One random item whose author (creator) or publisher equals ``genre_value``.

    Raises:
        ValidationError: genre_type is not "author"/"publisher", or genre_value is empty.
        NotFoundError: no item matches.
    """
    field = GENRE_FIELDS.get(genre_type)
    if field is None:
        raise ValidationError(f"Invalid genre type: {genre_type!r}")
    if not genre_value:
        raise ValidationError("genre_value is required")

    matches = [item for item in items if getattr(item, field) == genre_value]
    if not matches:
        raise NotFoundError(f"No book with {genre_type} {genre_value!r}")
    return (rng or random).choice(matches)
