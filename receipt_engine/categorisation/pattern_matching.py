"""
Generic Pattern Matching for Receipt Classification.

Provides reusable keyword, alias and identifier matching with a
deterministic order of preference.
"""

import re
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Pattern, Tuple


def by_match_priority(keys: Iterable[str]) -> List[str]:
    """Order keys longest first, ties broken alphabetically."""
    return sorted(keys, key=lambda k: (-len(k), k))


def match_longest_key(text: str, prioritized_keys: Iterable[str]) -> Optional[str]:
    """
    Find the highest-priority key contained in text.

    Args:
        text: Normalized (uppercase) text to search
        prioritized_keys: Keys already in priority order (see by_match_priority)

    Returns:
        The first key found as a substring, or None

    Example:
        >>> match_longest_key("COOP EXTRA STRØMMEN", ["EXTRA", "COOP"])
        "EXTRA"
    """
    for key in prioritized_keys:
        if key in text:
            return key
    return None


def match_alias(text: str, aliases: Dict[str, str]) -> Optional[Tuple[str, str]]:
    """
    Match text against multi-word aliases.

    Args:
        text: Normalized text to search
        aliases: Alias phrase -> catalog key

    Returns:
        Tuple of (matched_phrase, catalog_key) or None
    """
    for phrase in by_match_priority(aliases):
        if phrase in text:
            return phrase, aliases[phrase]
    return None


def match_identifier(text: str, identifiers: Dict[str, str]) -> Optional[str]:
    """
    Exact substring match of organisation identifiers (e.g. "NO 976 584 171 MVA").

    Args:
        text: Normalized text to search
        identifiers: Identifier string -> catalog key

    Returns:
        Catalog key of the matched identifier, or None
    """
    for identifier in by_match_priority(identifiers):
        if identifier.upper() in text:
            return identifiers[identifier]
    return None


@lru_cache(maxsize=32)
def _word_pattern(keywords: Tuple[str, ...]) -> Pattern:
    alternatives = "|".join(re.escape(k) for k in by_match_priority(keywords))
    return re.compile(rf"(?<!\w)({alternatives})(?!\w)")


def match_keyword_words(text: str, keywords: Iterable[str]) -> Optional[str]:
    """
    Match whole words from a keyword list.

    Args:
        text: Normalized (uppercase) text
        keywords: Uppercase keywords

    Returns:
        First keyword found as a whole word, or None
    """
    keywords = tuple(keywords)
    if not text or not keywords:
        return None
    match = _word_pattern(keywords).search(text)
    return match.group(1) if match else None
