"""Read-only word tables shared by the normalizer and display formatter."""

from collections.abc import Iterable
from dataclasses import dataclass, field


def _words(words: Iterable[str]) -> frozenset[str]:
    return frozenset(word.strip().lower() for word in words if word and word.strip())


# Stripped once, in this order, by the comparison normalizer.
LEADING_PREFIXES: tuple[str, ...] = ("a ", "an ", "the ", "some ", "fresh ", "organic ")

LOWERCASE_WORDS = _words(
    ["a", "an", "the", "of", "in", "for", "with", "and", "or", "to", "on", "at", "by", "per"]
)

UPPERCASE_ABBREVIATIONS = _words(
    [
        "pg",
        "uht",
        "hp",
        "bbq",
        "uk",
        "eu",
        "xl",
        "xxl",
        "cbd",
        "dha",
        "epa",
        "gmo",
        "msg",
        "kcal",
        "ipa",
    ]
)

GARBAGE_PATTERNS = _words(
    [
        "test item",
        "asdfgh",
        "placeholder",
        "unknown item",
        "null value",
        "undefined",
        "n/a",
    ]
)


@dataclass(frozen=True)
class Vocabulary:
    """Word lists consulted by name validation and title casing."""

    lowercase_words: frozenset[str] = field(default=LOWERCASE_WORDS)
    abbreviations: frozenset[str] = field(default=UPPERCASE_ABBREVIATIONS)
    denylist: frozenset[str] = field(default=GARBAGE_PATTERNS)

    def extended(
        self,
        lowercase_words: Iterable[str] = (),
        abbreviations: Iterable[str] = (),
        denylist: Iterable[str] = (),
    ) -> "Vocabulary":
        """Return a new vocabulary with extra words merged in."""
        return Vocabulary(
            lowercase_words=self.lowercase_words | _words(lowercase_words),
            abbreviations=self.abbreviations | _words(abbreviations),
            denylist=self.denylist | _words(denylist),
        )


DEFAULT_VOCABULARY = Vocabulary()
