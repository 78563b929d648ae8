"""Exhaustive cosine-similarity ranking of passages against a query."""

import math
from collections.abc import Sequence

import numpy as np

from ..domain import Passage, ScoredPassage

DEFAULT_TOP_K = 8


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity over the shared prefix of two vectors.

    Returns 0.0 when either vector has zero norm (or the shared prefix is
    empty) and whenever the result would not be finite.
    """
    length = min(len(a), len(b))
    if length == 0:
        return 0.0

    va = np.asarray(a[:length], dtype=np.float64)
    vb = np.asarray(b[:length], dtype=np.float64)
    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    score = float(np.dot(va, vb)) / (norm_a * norm_b)
    if not math.isfinite(score):
        return 0.0
    # Rounding can push identical vectors a hair past 1.
    return max(-1.0, min(1.0, score))


class Ranker:
    """Scores every passage and keeps the top ``k``."""

    def __init__(self, default_k: int = DEFAULT_TOP_K) -> None:
        if default_k < 1:
            raise ValueError("default_k must be at least 1")
        self.default_k = default_k

    def rank(
        self,
        query_vector: Sequence[float],
        passages: Sequence[tuple[Passage, Sequence[float]]],
        k: int | None = None,
    ) -> list[ScoredPassage]:
        """Rank passages by similarity to the query.

        Args:
            query_vector: Embedding of the question.
            passages: ``(passage, vector)`` pairs in split order.
            k: Number of passages to keep; defaults to ``default_k``.

        Returns:
            ``min(k, len(passages))`` scored passages, highest score first.
            Equal scores keep their original order.

        Raises:
            ValueError: If ``k`` is less than 1.
        """
        top_k = self.default_k if k is None else k
        if top_k < 1:
            raise ValueError("k must be at least 1")

        scored = [
            ScoredPassage(passage=passage, score=cosine_similarity(query_vector, vector))
            for passage, vector in passages
        ]
        # sorted() is stable, so ties stay in split order
        scored = sorted(scored, key=lambda item: item.score, reverse=True)
        return scored[:top_k]
