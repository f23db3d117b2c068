"""
Cosine similarity ranking.

Full scan over the active collection; no approximate index. Collections are
repository-sized and ranking runs once per query.

Dependencies: math, repo_llama.models.fragment
System role: Top-k retrieval
"""

import math
from collections.abc import Sequence

from repo_llama.core.exceptions import (
    CorruptCollectionError,
    DimensionMismatchError,
    ValidationError,
)
from repo_llama.models.fragment import Fragment, ScoredFragment


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine of the angle between two vectors.

    Zero-magnitude vectors score 0.0, as do vectors whose score is not a
    finite number (NaN or infinite components, overflowing magnitudes).

    Raises:
        DimensionMismatchError: When the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))

    if norm_a == 0 or norm_b == 0:
        return 0.0

    score = dot / (norm_a * norm_b)
    if not math.isfinite(score):
        return 0.0

    # clamp rounding drift so exact matches stay within [-1, 1]
    return max(-1.0, min(1.0, score))


def check_dimensions(fragments: Sequence[Fragment], context_name: str | None = None) -> int | None:
    """
    Verify every fragment shares one embedding dimension.

    Returns:
        int | None: The shared dimension, or None when there are no fragments

    Raises:
        CorruptCollectionError: When dimensions differ
    """
    dimension: int | None = None
    for index, fragment in enumerate(fragments):
        length = len(fragment.embedding)
        if dimension is None:
            dimension = length
        elif length != dimension:
            raise CorruptCollectionError(
                "Fragments have mixed embedding dimensions",
                context_name=context_name,
                details={"index": index, "expected": dimension, "actual": length},
            )
    return dimension


def rank_fragments(
    query: Sequence[float],
    fragments: Sequence[Fragment],
    k: int,
) -> list[ScoredFragment]:
    """
    Return the k fragments most similar to the query.

    Ordering is descending by score; equal scores keep their input order.

    Args:
        query: Query embedding
        fragments: Read-only view of the active collection
        k: Maximum number of results

    Returns:
        list[ScoredFragment]: At most min(k, len(fragments)) results

    Raises:
        ValidationError: When k is negative
        DimensionMismatchError: When a fragment embedding differs in length from the query
    """
    if k < 0:
        raise ValidationError("k cannot be negative", field="k", details={"k": k})

    scored = [
        ScoredFragment(
            source=fragment.source,
            text=fragment.text,
            embedding=fragment.embedding,
            score=cosine_similarity(query, fragment.embedding),
        )
        for fragment in fragments
    ]

    # sorted() is stable with reverse=True, so ties keep input order
    scored = sorted(scored, key=lambda item: item.score, reverse=True)
    return scored[:k]
