#!/usr/bin/env python3
"""
Similarity Calculator - Cosine similarity between embeddings.
"""
from typing import Optional, Sequence

import numpy as np

from core.utils import cosine_similarity_from_distance


class SimilarityCalculator:
    """Calculate cosine distance / similarity between vectors."""

    @staticmethod
    def cosine_distance(vec1: Sequence[float], vec2: Sequence[float]) -> Optional[float]:
        """
        Cosine distance in [0, 2], the same quantity pgvector's <=> returns.

        Returns None when either vector is zero or the dimensions differ.
        """
        a = np.asarray(vec1, dtype=float)
        b = np.asarray(vec2, dtype=float)
        if a.shape != b.shape or a.size == 0:
            return None

        norm_a = np.linalg.norm(a)
        norm_b = np.linalg.norm(b)
        if norm_a == 0 or norm_b == 0:
            return None

        cosine = float(np.dot(a, b) / (norm_a * norm_b))
        return 1.0 - max(-1.0, min(1.0, cosine))

    @classmethod
    def calculate(
        cls,
        vec1: Optional[Sequence[float]],
        vec2: Optional[Sequence[float]]
    ) -> float:
        """
        Similarity `1 - cosine_distance`, clamped to [0, 1].

        Missing, zero or mismatched vectors score 0.0 rather than raising.
        """
        if vec1 is None or vec2 is None:
            return 0.0
        distance = cls.cosine_distance(vec1, vec2)
        if distance is None:
            return 0.0
        return cosine_similarity_from_distance(distance)

    @classmethod
    def best_of(cls, query: Optional[Sequence[float]], *candidates: Optional[Sequence[float]]) -> float:
        """Similarity to the closest of several candidate embeddings."""
        scores = [cls.calculate(query, vec) for vec in candidates if vec is not None]
        return max(scores) if scores else 0.0
