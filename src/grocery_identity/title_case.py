"""Grocery-appropriate title casing for display.

Display names keep measurement tokens (140g, 2L, 1.5kg) exactly as written,
render known abbreviations (PG, UHT, BBQ) in upper case, and keep short
prepositions and articles lower case unless they open the name. ALL-CAPS
receipt text comes out as ordinary title case.

    >>> to_grocery_title_case("140g CHIN CHIN")
    '140g Chin Chin'
    >>> to_grocery_title_case("PG TIPS TEA BAGS")
    'PG Tips Tea Bags'
"""

import re
import string

from .vocabulary import DEFAULT_VOCABULARY, Vocabulary

# Digits followed by unit letters, e.g. "140g", "500ml", "1.5L".
MEASUREMENT_PATTERN = re.compile(r"^[0-9]+(?:\.[0-9]+)?[A-Za-z]+$")

# Case folding is limited to the ASCII range.
_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _capitalize(word: str) -> str:
    if not word:
        return word
    return word[0].translate(_TO_UPPER) + word[1:].translate(_TO_LOWER)


def _format_word(word: str, index: int, vocabulary: Vocabulary) -> str:
    if MEASUREMENT_PATTERN.match(word):
        return word

    lowered = word.translate(_TO_LOWER)
    if lowered in vocabulary.abbreviations:
        return word.translate(_TO_UPPER)
    if index > 0 and lowered in vocabulary.lowercase_words:
        return lowered
    return _capitalize(word)


def to_grocery_title_case(name: str | None, vocabulary: Vocabulary | None = None) -> str | None:
    """Convert a grocery item name to display title case.

    None passes through unchanged; blank input gives an empty string.
    """
    if not name:
        return name

    words = name.split()
    if not words:
        return ""

    vocab = vocabulary or DEFAULT_VOCABULARY
    return " ".join(_format_word(word, index, vocab) for index, word in enumerate(words))


def normalize_display_name(name: str | None, vocabulary: Vocabulary | None = None) -> str:
    """Title-case a possibly missing name, giving "" when there is none."""
    if not name:
        return ""
    return to_grocery_title_case(name, vocabulary) or ""
