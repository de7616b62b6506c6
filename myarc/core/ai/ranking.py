"""Cosine similarity and threshold ranking over embedding vectors."""

from __future__ import annotations

import math
from typing import Any, List, Optional, Sequence, Tuple


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    if not a or not b or len(a) != len(b):
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    # One sqrt over the product keeps parallel vectors at exactly 1.0.
    norms = sum(x * x for x in a) * sum(y * y for y in b)
    if norms == 0:
        return 0.0
    return dot / math.sqrt(norms)


def score_candidates(
    query_vec: Sequence[float],
    candidates: Sequence[Tuple[Any, Sequence[float]]],
    threshold: Optional[float] = None,
) -> List[Tuple[Any, float]]:
    """Return ``(item, score)`` pairs above ``threshold``, best first.

    The sort is stable, so equal scores keep their input order.
    """
    scored = []
    for item, vec in candidates:
        score = cosine_similarity(query_vec, vec)
        if threshold is not None and score <= threshold:
            continue
        scored.append((item, score))
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def rank_candidates(
    query_vec: Sequence[float],
    candidates: Sequence[Tuple[Any, Sequence[float]]],
    threshold: Optional[float] = None,
) -> List[Any]:
    """Rank any candidate items by similarity to a query vector."""
    return [item for item, _score in score_candidates(query_vec, candidates, threshold)]
