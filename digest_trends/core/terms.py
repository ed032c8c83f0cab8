"""
Term extraction from item titles.

Titles are reduced to lowercase alphanumeric tokens, filtered against a stop
word set, and turned into candidate clustering keys:
1. Every adjacent pair of surviving tokens (two-word phrases)
2. Every surviving token of five or more characters (unigrams)
"""

from __future__ import annotations

from collections.abc import Iterable
import re


DEFAULT_STOPWORDS: frozenset[str] = frozenset(
    """
    the a an and or for with into from to of in on at by
    is are was were be been it this that as new after over under
    via how why what when where can will its their your our about
    says said could would also just get got has have had may might
    much more most some than them then these they very want year years
    first last still back down make made takes turns launches gets looks
    comes goes shows finds keeps lets puts runs sets tells uses wants works learns
    """.split()
)

_NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}

_ENTITY_RE = re.compile(r"&(?:#(\d+)|#[xX]([0-9a-fA-F]+)|(amp|lt|gt|quot|apos));")
_NON_WORD_RE = re.compile(r"[^a-z0-9\s]")


def decode_entities(text: str) -> str:
    """Decode numeric, hex and the five basic named HTML entities.

    The digest feed sometimes delivers titles with literal entity text such
    as ``Q&amp;A`` or ``&#8217;``. Numeric references outside the Unicode
    range are left untouched.
    """
    return _ENTITY_RE.sub(_replace_entity, text or "")


def _replace_entity(match: re.Match[str]) -> str:
    decimal, hexadecimal, name = match.groups()
    if name:
        return _NAMED_ENTITIES[name]
    try:
        return chr(int(decimal) if decimal else int(hexadecimal, 16))
    except (ValueError, OverflowError):
        return match.group(0)


def tokenize(
    title: str,
    stopwords: Iterable[str] = DEFAULT_STOPWORDS,
    min_token_length: int = 3,
) -> list[str]:
    """Normalize a title into filtered lowercase tokens."""
    stop = stopwords if isinstance(stopwords, (set, frozenset)) else frozenset(stopwords)
    text = _NON_WORD_RE.sub(" ", decode_entities(title).lower())
    return [
        word
        for word in text.split()
        if len(word) >= min_token_length and word not in stop and not word.isdigit()
    ]


def extract_terms(
    title: str,
    stopwords: Iterable[str] = DEFAULT_STOPWORDS,
    min_token_length: int = 3,
    min_unigram_length: int = 5,
) -> list[str]:
    """Extract candidate topic terms from a title.

    Args:
        title: Raw item title, possibly containing HTML entities
        stopwords: Words never used as tokens
        min_token_length: Shortest token kept after normalization
        min_unigram_length: Shortest token also emitted on its own

    Returns:
        Two-word phrases in left-to-right order followed by unigrams.
        Duplicates are kept; callers de-duplicate per item.

    Examples:
        >>> extract_terms("Robot Dance Goes Viral")
        ['robot dance', 'dance viral', 'robot', 'dance', 'viral']
    """
    words = tokenize(title, stopwords, min_token_length)
    terms = [f"{first} {second}" for first, second in zip(words, words[1:])]
    terms.extend(word for word in words if len(word) >= min_unigram_length)
    return terms
