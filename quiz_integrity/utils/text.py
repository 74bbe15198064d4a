"""Text similarity utilities: edit distance and Jaccard scoring."""

from __future__ import annotations

from collections.abc import Set

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Unit-cost insert/delete/substitute distance over Unicode code points."""
    return Levenshtein.distance(a, b)


def prompt_similarity(a: str, b: str) -> float:
    """1 - edit_distance / max(len). Two empty strings are identical (1.0)."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - edit_distance(a, b) / longest


def jaccard_index(a: Set[str], b: Set[str]) -> float:
    """|A & B| / |A | B| by exact string match. Two empty sets score 1.0."""
    union = len(a | b)
    if union == 0:
        return 1.0
    return len(a & b) / union
