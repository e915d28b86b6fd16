#!/usr/bin/env python3
"""
Hybrid Ranker - Blend lexical and embedding similarity into one relevance score.

For every candidate:
- text_similarity: best of weighted trigram similarity against the title and
  description, or a fixed full-text score when every query term is present.
  An absent search text contributes the neutral `empty_text_score`.
- vector_similarity: 1 - cosine distance to the query embedding, clamped to
  [0, 1]; 0 when either side has no embedding.
- relevance = text_similarity * w_text + vector_similarity * w_vector, with
  the weight pair normalised to sum to 1.

Candidates below the threshold are dropped, the rest are sorted by relevance
(stable, so ties keep corpus order) and truncated to the result limit.
Repositories are ordered by the unclamped boosted relevance, then stars, then
health; their reported score stays clamped to [0, 1].
"""

import math
from typing import List, Optional, Sequence

from core.ranking.models import (
    Candidate, QuerySpec, WeightPair, MatchResult, ScoreBreakdown, clamp_unit
)
from core.ranking.similarity import SimilarityCalculator
from core.ranking import text_similarity as lexical

# Opportunity text signal
TITLE_TRIGRAM_FACTOR = 0.7
DESCRIPTION_TRIGRAM_FACTOR = 0.3
FULL_TEXT_MATCH_SCORE = 0.8

# Repository text signal
REPO_NAME_TRIGRAM_FACTOR = 0.4
REPO_FULL_NAME_TRIGRAM_FACTOR = 0.3
REPO_DESCRIPTION_TRIGRAM_FACTOR = 0.2
REPO_TOPIC_MATCH_SCORE = 0.6
REPO_FULL_TEXT_MATCH_SCORE = 0.7

STRONG_TEXT_MATCH = 0.8
STRONG_VECTOR_MATCH = 0.7


class HybridRanker:
    """Rank candidates by combined lexical and vector similarity. Stateless."""

    def __init__(self, empty_text_score: float = 0.5):
        self.empty_text_score = clamp_unit(empty_text_score)
        self.similarity_calc = SimilarityCalculator()

    def text_similarity(self, candidate: Candidate, search_text: Optional[str]) -> float:
        """Lexical relevance of an opportunity-like candidate, in [0, 1]."""
        if not search_text or not search_text.strip():
            return self.empty_text_score

        description = candidate.description or ''
        full_text = FULL_TEXT_MATCH_SCORE if lexical.full_text_match(
            f"{candidate.title} {description}", search_text
        ) else 0.0

        return clamp_unit(max(
            lexical.trigram_similarity(candidate.title, search_text) * TITLE_TRIGRAM_FACTOR,
            lexical.trigram_similarity(description, search_text) * DESCRIPTION_TRIGRAM_FACTOR,
            full_text,
        ))

    def repository_text_similarity(self, candidate: Candidate, search_text: Optional[str]) -> float:
        """Lexical relevance of a repository, also considering topics and full name."""
        if not search_text or not search_text.strip():
            return self.empty_text_score

        description = candidate.description or ''
        topic_score = REPO_TOPIC_MATCH_SCORE if lexical.any_term_in(candidate.topics, search_text) else 0.0
        full_text = REPO_FULL_TEXT_MATCH_SCORE if lexical.full_text_match(
            f"{candidate.title} {description}", search_text
        ) else 0.0

        return clamp_unit(max(
            lexical.trigram_similarity(candidate.title, search_text) * REPO_NAME_TRIGRAM_FACTOR,
            lexical.trigram_similarity(candidate.full_name or '', search_text) * REPO_FULL_NAME_TRIGRAM_FACTOR,
            lexical.trigram_similarity(description, search_text) * REPO_DESCRIPTION_TRIGRAM_FACTOR,
            topic_score,
            full_text,
        ))

    def vector_similarity(self, candidate: Candidate, query_embedding: Optional[Sequence[float]]) -> float:
        """Similarity to the closer of the candidate's description and title embeddings."""
        if query_embedding is None:
            return 0.0
        return self.similarity_calc.best_of(query_embedding, candidate.embedding, candidate.title_embedding)

    @staticmethod
    def quality_boost(candidate: Candidate) -> float:
        """Multiplier favouring healthy, popular repositories (>= 1.0)."""
        health = clamp_unit(candidate.health_score or 0.0)
        stars = max(candidate.stars_count or 0, 1)
        return 1.0 + health / 2.0 + math.log10(stars) / 50.0

    def _explain(self, candidate: Candidate, query: QuerySpec, text_score: float, vector_score: float):
        reasons: List[str] = []
        warnings: List[str] = []

        if query.has_search_text and text_score >= STRONG_TEXT_MATCH:
            reasons.append('Matches all search terms')
        if query.query_embedding is not None and vector_score > STRONG_VECTOR_MATCH:
            reasons.append('Semantically similar to your query')

        if query.query_embedding is not None and candidate.embedding is None and candidate.title_embedding is None:
            warnings.append('No embedding available; ranked on text only')

        return reasons, warnings

    def _score(
        self,
        candidate: Candidate,
        query: QuerySpec,
        weights: WeightPair,
        repository: bool = False
    ) -> MatchResult:
        if repository:
            text_score = self.repository_text_similarity(candidate, query.search_text)
        else:
            text_score = self.text_similarity(candidate, query.search_text)
        vector_score = self.vector_similarity(candidate, query.query_embedding)

        components = {
            'text_similarity': text_score,
            'vector_similarity': vector_score,
        }
        total = text_score * weights.text_weight + vector_score * weights.vector_weight

        if repository:
            boost = self.quality_boost(candidate)
            components['quality_boost'] = clamp_unit(boost - 1.0)
            total *= boost

        reasons, warnings = self._explain(candidate, query, text_score, vector_score)

        return MatchResult(
            candidate_id=candidate.id,
            breakdown=ScoreBreakdown(
                components=components,
                weights={'text_similarity': weights.text_weight, 'vector_similarity': weights.vector_weight},
                total_score=clamp_unit(total)
            ),
            match_reasons=reasons,
            warnings=warnings,
            candidate=candidate
        )

    @staticmethod
    def _select(results: List[MatchResult], query: QuerySpec, sort_key=None) -> List[MatchResult]:
        kept = [r for r in results if r.total_score >= query.similarity_threshold]
        # sorted() is stable: equal keys keep corpus order
        kept = sorted(kept, key=sort_key or (lambda r: r.total_score), reverse=True)
        return kept[:query.result_limit]

    def boosted_relevance(self, result: MatchResult) -> float:
        """Unclamped repository relevance: weighted similarity times the quality boost."""
        weights = result.breakdown.weights
        relevance = sum(result.breakdown.get(name) * weight for name, weight in weights.items())
        return relevance * self.quality_boost(result.candidate)

    def _repository_sort_key(self, result: MatchResult):
        candidate = result.candidate
        return (
            self.boosted_relevance(result),
            candidate.stars_count or 0,
            candidate.health_score or 0.0,
        )

    def rank(self, candidates: Sequence[Candidate], query: QuerySpec) -> List[MatchResult]:
        """
        Rank candidates against a query.

        Raises:
            InvalidWeightConfiguration: both weights zero, or a negative weight.
            InvalidLimit: result_limit <= 0.
            InvalidThreshold: threshold outside [0, 1].
        """
        query.validate()
        weights = query.weights.normalized()
        scored = [self._score(c, query, weights) for c in candidates]
        return self._select(scored, query)

    def rank_repositories(self, candidates: Sequence[Candidate], query: QuerySpec) -> List[MatchResult]:
        """Rank repositories; relevance is scaled by the repository quality boost."""
        query.validate()
        weights = query.weights.normalized()
        scored = [self._score(c, query, weights, repository=True) for c in candidates]
        return self._select(scored, query, sort_key=self._repository_sort_key)
