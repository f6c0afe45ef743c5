"""Grocery Identity - item name resolution and crowdsourced price labels."""

from .config import ConfigManager
from .fuzzy_match import (
    calculate_similarity,
    find_duplicate_name,
    find_fuzzy_matches,
    is_duplicate_item_name,
    levenshtein_distance,
)
from .item_normalizer import is_valid_product_name, normalize_item_name
from .models import (
    MatchCandidate,
    ParsedSize,
    PriceLabel,
    PriceObservation,
    PriceSource,
    RawMention,
    ResolvedPrice,
    UnitCategory,
)
from .price_resolver import get_price_label, resolve_price
from .size_normalizer import (
    calculate_price_per_unit,
    format_price_per_unit,
    normalize_size,
    normalize_size_for_dedup,
    parse_size,
)
from .title_case import normalize_display_name, to_grocery_title_case
from .variant_key import is_duplicate_item, variant_key
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary

__version__ = "0.1.0"

__all__ = [
    "calculate_price_per_unit",
    "calculate_similarity",
    "ConfigManager",
    "DEFAULT_VOCABULARY",
    "find_duplicate_name",
    "find_fuzzy_matches",
    "format_price_per_unit",
    "get_price_label",
    "is_duplicate_item",
    "is_duplicate_item_name",
    "is_valid_product_name",
    "levenshtein_distance",
    "MatchCandidate",
    "normalize_display_name",
    "normalize_item_name",
    "normalize_size",
    "normalize_size_for_dedup",
    "ParsedSize",
    "parse_size",
    "PriceLabel",
    "PriceObservation",
    "PriceSource",
    "RawMention",
    "resolve_price",
    "ResolvedPrice",
    "to_grocery_title_case",
    "UnitCategory",
    "variant_key",
    "Vocabulary",
]
