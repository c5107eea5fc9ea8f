"""
Keyword matching helpers for the heuristic scorers.

Matching is substring-based over lower-cased prompt text, so "lighting"
also counts as a hit for "light".
"""

import re
from typing import Iterable, List, Mapping, Sequence


def word_count(text: str) -> int:
    """Number of whitespace-separated words."""
    return len(text.split())


def contains_any(text: str, terms: Iterable[str]) -> bool:
    """True if any term occurs in text."""
    return any(term in text for term in terms)


def count_matches(text: str, terms: Iterable[str]) -> int:
    """Number of distinct terms that occur in text."""
    return sum(1 for term in terms if term in text)


def matching_terms(text: str, terms: Iterable[str]) -> List[str]:
    """Terms that occur in text, in table order."""
    return [term for term in terms if term in text]


def matched_categories(text: str, categories: Mapping[str, Sequence[str]]) -> List[str]:
    """Names of categories with at least one term in text."""
    return [name for name, terms in categories.items() if contains_any(text, terms)]


def split_tokens(text: str, pattern: str = r"[,\s]+") -> List[str]:
    """Lower-case and split on pattern, dropping empty tokens."""
    return [token for token in re.split(pattern, text.lower()) if token]
