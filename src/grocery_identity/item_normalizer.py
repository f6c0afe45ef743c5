"""Shared item name normalization utilities."""

import re

from .vocabulary import DEFAULT_VOCABULARY, LEADING_PREFIXES, Vocabulary

MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 50
MIN_ALPHA_RATIO = 0.5

_ALPHA = re.compile(r"[A-Za-z]")
_NUMERIC_ONLY = re.compile(r"^[\d\s.,]+$")

# (suffix, minimum length exclusive, replacement); first hit wins.
_PLURAL_RULES: tuple[tuple[str, int, str], ...] = (
    ("ies", 4, "y"),
    ("ves", 4, "f"),
    ("es", 3, ""),
)


def is_valid_product_name(text: str, vocabulary: Vocabulary | None = None) -> bool:
    """Check whether text looks like a real product name.

    Rejects empty or out-of-range lengths, placeholder garbage, numbers and
    pure symbols, and anything with less than half of its characters alphabetic.
    """
    if not text:
        return False
    if not MIN_NAME_LENGTH <= len(text) <= MAX_NAME_LENGTH:
        return False

    lowered = text.lower()
    vocab = vocabulary or DEFAULT_VOCABULARY
    if any(pattern in lowered for pattern in vocab.denylist):
        return False

    if _NUMERIC_ONLY.match(text):
        return False

    alpha_count = len(_ALPHA.findall(text))
    if alpha_count == 0:
        return False

    return alpha_count / len(text) >= MIN_ALPHA_RATIO


def _strip_prefix(name: str) -> str:
    for prefix in LEADING_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix) :]
    return name


def _strip_plural(name: str) -> str:
    for suffix, min_length, replacement in _PLURAL_RULES:
        if name.endswith(suffix) and len(name) > min_length:
            return name[: -len(suffix)] + replacement
    if name.endswith("s") and len(name) > 2 and not name.endswith("ss"):
        return name[:-1]
    return name


def _normalize_once(name: str) -> str:
    cleaned = _strip_prefix(name.lower().strip())
    return _strip_plural(cleaned).strip()


def normalize_item_name(item_name: str) -> str:
    """Normalize an item name into its comparison form.

    Lowercases, drops one leading filler word ("the", "fresh", ...) and a simple
    plural suffix. The pass is repeated until the result stops changing, so the
    output is already in normal form.
    """
    current = _normalize_once(item_name)
    while True:
        again = _normalize_once(current)
        if again == current:
            return current
        current = again
