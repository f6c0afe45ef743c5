"""Identity keys for a product in a specific pack size."""

import re

from .fuzzy_match import is_duplicate_item_name
from .item_normalizer import normalize_item_name
from .size_normalizer import normalize_size_for_dedup

KEY_SEPARATOR = "|"


def variant_key(name: str, size: str | None) -> str:
    """Build the deduplication key for a name and pack size.

    The name goes through the item normalizer, so "Cashews" and "cashew"
    share a key; the size is lowercased with all whitespace removed, so
    "180 g" and "180g" do too.
    """
    normalized_size = re.sub(r"\s+", "", (size or "").lower())
    return f"{normalize_item_name(name)}{KEY_SEPARATOR}{normalized_size}"


def is_duplicate_item(
    name1: str,
    size1: str | None,
    name2: str,
    size2: str | None,
) -> bool:
    """Check whether two mentions are the same product in the same pack size.

    Sizes are compared by quantity, so "2 pints" equals "2pt" and "1 litre"
    equals "1000ml". A missing size only matches another missing size.
    """
    if normalize_size_for_dedup(size1) != normalize_size_for_dedup(size2):
        return False
    return is_duplicate_item_name(name1, name2)
