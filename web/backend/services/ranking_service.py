#!/usr/bin/env python3
"""
Ranking service - translate API requests into pipeline calls and results
into response models.
"""

import logging
from typing import List, Optional

from core.config_loader import HybridSearchConfig
from core.pipeline import RankingPipeline
from core.ranking.models import MatchResult, QuerySpec, WeightPair
from ..models.requests import SearchRequest, SimilarUsersRequest
from ..models.responses import (
    RankedResult,
    RepositoryHealth,
    ScoreBreakdownModel
)

logger = logging.getLogger(__name__)


def to_ranked_result(result: MatchResult) -> RankedResult:
    candidate = result.candidate
    return RankedResult(
        candidate_id=result.candidate_id,
        title=candidate.title if candidate else None,
        kind=candidate.kind.value if candidate else None,
        repository_id=candidate.repository_id if candidate else None,
        score=result.total_score,
        breakdown=ScoreBreakdownModel(**result.breakdown.to_dict()),
        match_reasons=list(result.match_reasons),
        warnings=list(result.warnings)
    )


class RankingService:
    """Service wrapping a RankingPipeline for the HTTP layer."""

    def __init__(self, pipeline: RankingPipeline):
        self.pipeline = pipeline

    @property
    def search_defaults(self) -> HybridSearchConfig:
        return self.pipeline.config.search

    def build_query(self, request: SearchRequest) -> QuerySpec:
        """Merge a search request with the configured defaults."""
        defaults = self.search_defaults
        return QuerySpec(
            search_text=request.search_text,
            query_embedding=request.query_embedding,
            weights=WeightPair(
                text_weight=defaults.text_weight if request.text_weight is None else request.text_weight,
                vector_weight=defaults.vector_weight if request.vector_weight is None else request.vector_weight
            ),
            similarity_threshold=(
                defaults.similarity_threshold if request.similarity_threshold is None
                else request.similarity_threshold
            ),
            result_limit=defaults.result_limit if request.limit is None else request.limit
        )

    def search_opportunities(self, request: SearchRequest) -> List[RankedResult]:
        return [to_ranked_result(r) for r in self.pipeline.search(self.build_query(request))]

    def search_repositories(self, request: SearchRequest) -> List[RankedResult]:
        return [to_ranked_result(r) for r in self.pipeline.search_repositories(self.build_query(request))]

    def similar_users(self, request: SimilarUsersRequest) -> List[RankedResult]:
        results = self.pipeline.similar_users(
            request.query_embedding,
            threshold=request.threshold,
            limit=request.limit
        )
        return [to_ranked_result(r) for r in results]

    def get_matches(
        self,
        user_id: str,
        threshold: Optional[float] = None,
        limit: Optional[int] = None
    ) -> List[RankedResult]:
        matches = self.pipeline.match_for_user(user_id, threshold=threshold, limit=limit)
        return [to_ranked_result(m) for m in matches]

    def get_trending(
        self,
        window_hours: Optional[float] = None,
        min_engagement: Optional[int] = None,
        limit: Optional[int] = None
    ) -> List[RankedResult]:
        results = self.pipeline.trending(
            window_hours=window_hours,
            min_engagement=min_engagement,
            limit=limit
        )
        return [to_ranked_result(r) for r in results]

    def get_health(self, repository_id: str) -> RepositoryHealth:
        snapshot = self.pipeline.health(repository_id)
        data = snapshot.to_dict()
        data['repository_id'] = data.pop('entity_id')
        return RepositoryHealth(**data)
