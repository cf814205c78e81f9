"""Fuzzy app-name matching."""

from difflib import SequenceMatcher
from typing import Iterable, List

DEFAULT_CUTOFF = 0.6


def similarity(query: str, candidate: str) -> float:
    """Score how well candidate matches query, 0.0 to 1.0.

    Substring hits score at least as high as the cutoff so partial names
    (``api`` for ``api-default``) always qualify.
    """
    query = query.lower()
    candidate = candidate.lower()
    ratio = SequenceMatcher(None, query, candidate).ratio()
    if query and query in candidate:
        ratio = max(ratio, DEFAULT_CUTOFF + (1 - DEFAULT_CUTOFF) * len(query) / len(candidate))
    return ratio


def rank_matches(
    query: str,
    names: Iterable[str],
    limit: int = 5,
    cutoff: float = DEFAULT_CUTOFF,
) -> List[str]:
    """Return names similar to query, best match first."""
    scored = [(similarity(query, name), name) for name in names if name]
    hits = [(score, name) for score, name in scored if score >= cutoff]
    hits.sort(key=lambda pair: (-pair[0], pair[1]))
    return [name for _, name in hits[:limit]]
