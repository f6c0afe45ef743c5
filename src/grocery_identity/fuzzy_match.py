"""Edit-distance scoring and ranked matching of item names."""

import logging

from .item_normalizer import normalize_item_name
from .models import MatchCandidate

logger = logging.getLogger(__name__)

DEFAULT_MIN_SIMILARITY = 70
DEFAULT_MAX_RESULTS = 10
# Containment in either direction never scores below this.
CONTAINMENT_FLOOR = 85
SHORT_INPUT_LENGTH = 4
SHORT_INPUT_ALLOWANCE = 10
DUPLICATE_SIMILARITY_THRESHOLD = 85
DUPLICATE_MIN_LENGTH = 5
DUPLICATE_CONTAINMENT_RATIO = 0.8


def levenshtein_distance(a: str, b: str) -> int:
    """Number of single-character insertions, deletions and substitutions."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
        previous = current
    return previous[-1]


def calculate_similarity(a: str, b: str) -> float:
    """Similarity percentage (0-100) of two strings, ignoring case and padding."""
    first = a.lower().strip()
    second = b.lower().strip()

    if first == second:
        return 100.0

    max_len = max(len(first), len(second))
    distance = levenshtein_distance(first, second)
    return (max_len - distance) / max_len * 100


def find_fuzzy_matches(
    input_text: str,
    candidates: list[str],
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> list[MatchCandidate]:
    """Rank candidates by similarity to the input.

    Candidates are compared in normalized form; the first candidate of each
    normalized form is kept and later ones are skipped. Inputs shorter than
    four characters get a threshold ten points lower.

    Args:
        input_text: Text typed or scanned by the user
        candidates: Catalog names to compare against
        min_similarity: Minimum score for a non-containment match
        max_results: Maximum number of matches returned

    Returns:
        Matches sorted by similarity, highest first
    """
    normalized_input = normalize_item_name(input_text)
    if not normalized_input:
        return []

    threshold = min_similarity
    if len(normalized_input) < SHORT_INPUT_LENGTH:
        threshold = min_similarity - SHORT_INPUT_ALLOWANCE

    matches: list[MatchCandidate] = []
    seen: set[str] = set()

    for candidate in candidates:
        normalized = normalize_item_name(candidate)
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)

        if normalized == normalized_input:
            matches.append(MatchCandidate(name=candidate, similarity=100, is_exact=True))
            continue

        similarity = calculate_similarity(normalized_input, normalized)
        if normalized_input in normalized or normalized in normalized_input:
            matches.append(
                MatchCandidate(name=candidate, similarity=max(similarity, CONTAINMENT_FLOOR))
            )
        elif similarity >= threshold:
            matches.append(MatchCandidate(name=candidate, similarity=similarity))

    # sorted() is stable, so equal scores keep candidate order
    ranked = sorted(matches, key=lambda m: m.similarity, reverse=True)
    logger.debug(
        "Matched '%s' against %d candidates: %d above %.0f",
        normalized_input,
        len(candidates),
        len(ranked),
        threshold,
    )
    return ranked[: max(max_results, 0)]


def is_duplicate_item_name(
    name1: str,
    name2: str,
    threshold: float = DUPLICATE_SIMILARITY_THRESHOLD,
) -> bool:
    """Check whether two names refer to the same item.

    Catches plurals, leading articles, case and small typos, without letting
    "rice" swallow "rice pudding".
    """
    norm1 = normalize_item_name(name1)
    norm2 = normalize_item_name(name2)

    if not norm1 or not norm2:
        return False
    if norm1 == norm2:
        return True

    shorter, longer = sorted((norm1, norm2), key=len)
    if len(shorter) > 3 and shorter in longer:
        if len(shorter) / len(longer) > DUPLICATE_CONTAINMENT_RATIO:
            return True

    if min(len(norm1), len(norm2)) >= DUPLICATE_MIN_LENGTH:
        return calculate_similarity(norm1, norm2) >= threshold

    return False


def find_duplicate_name(
    new_name: str,
    existing_names: list[str],
    threshold: float = DUPLICATE_SIMILARITY_THRESHOLD,
) -> str | None:
    """Return the first existing name that duplicates new_name."""
    for existing in existing_names:
        if is_duplicate_item_name(new_name, existing, threshold):
            return existing
    return None
