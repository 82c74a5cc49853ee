"""Typo suggestions for unknown command and property names.

Case-only mistakes (`TapOn`) are caught earlier by an exact case-insensitive
lookup; the suggestions here cover real misspellings (`tapOnn`, `txt`).
"""

from __future__ import annotations

from typing import Iterable, List

MAX_EDIT_DISTANCE = 2
MAX_SUGGESTIONS = 3


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two names (insert, delete, substitute)."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    row = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        diagonal, row[0] = row[0], i
        for j, cb in enumerate(b, start=1):
            above = row[j]
            row[j] = min(above + 1, row[j - 1] + 1, diagonal + (ca != cb))
            diagonal = above
    return row[-1]


def suggest_typos(name: str, candidates: Iterable[str], max_dist: int = MAX_EDIT_DISTANCE) -> List[str]:
    """Vocabulary names within `max_dist` edits of `name`, ignoring case.

    Closest first, ties broken alphabetically, at most MAX_SUGGESTIONS.
    """
    lowered = name.lower()
    scored = [
        (levenshtein_distance(lowered, candidate.lower()), candidate)
        for candidate in candidates
    ]
    close = sorted(pair for pair in scored if pair[0] <= max_dist)
    return [candidate for _, candidate in close[:MAX_SUGGESTIONS]]


def did_you_mean(name: str, candidates: Iterable[str]) -> str:
    """Return a `; did you mean: a, b?` suffix, or "" when nothing is close."""
    suggestions = suggest_typos(name, candidates)
    if not suggestions:
        return ""
    return f"; did you mean: {', '.join(suggestions)}?"
