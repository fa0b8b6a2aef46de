"""
Embedding Strategy

This module defines HOW text is extracted from catalog items for embedding.
Changes to this module require invalidating cached embeddings (bump STRATEGY_VERSION
and clear the embedding cache).

The embedding text formula:
    descriptive_text                 when the item has a non-blank description
    "{title} by {creator}"           otherwise

This is used for BOTH:
- Reference items (the book a user asks "similar to" for)
- Candidate items in the pool
"""

from ..models.item import CatalogItem

# Metadata for cache validation
# IMPORTANT: Bump this version when the embedding logic changes!
STRATEGY_VERSION = "1.0"

# OpenAI embedding configuration
EMBEDDING_MODEL = "text-embedding-3-small"
EMBEDDING_DIMENSIONS = 1536


def get_embed_text(item: CatalogItem) -> str:
    """
    Generate text for embedding from a catalog item.

    Formula: the description when present, else "{title} by {creator}".

    Args:
        item: CatalogItem (description optional)

    Returns:
        Text string to be embedded
    """
    if item.has_text:
        return item.descriptive_text
    return f"{item.title} by {item.creator}"


def validate_item_for_embedding(item: CatalogItem) -> tuple[bool, str]:
    """
    Validate that an item has enough fields to build a meaningful embedding text.

    Returns:
        (is_valid, error_message)
    """
    if not item.id:
        return False, "Missing 'id' field"

    if not item.has_text and not (item.title or item.creator):
        return False, "Missing description, title and creator"

    return True, ""
