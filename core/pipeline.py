#!/usr/bin/env python3
"""
Ranking Pipeline - Retrieval through a CandidateStore plus scoring.

Every call follows the same flow:
1. Validate the request (fail fast, before any candidate is scored)
2. Fetch candidates from the store, passing the request as a hint
3. Score with the HybridRanker, OpportunityMatcher or CompositeSignalScorer
4. Filter, sort and truncate; the core's threshold and limit are authoritative

The pipeline holds only immutable scorers and a store reference, so one
instance can serve concurrent requests.
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from core.config_loader import RankingConfig
from core.exceptions import InvalidLimit, InvalidThreshold
from core.matcher import OpportunityMatcher, MatchScore
from core.ranking.hybrid import HybridRanker
from core.ranking.models import (
    CandidateKind, HealthSnapshot, MatchResult, QuerySpec, UserProfile, WeightPair
)
from core.ranking.signals import CompositeSignalScorer
from core.store.interfaces import CandidateStore, QueryHint
from core.utils import utc_now

logger = logging.getLogger(__name__)

SIMILAR_USER_THRESHOLD = 0.7
SIMILAR_USER_LIMIT = 10


class RankingPipeline:
    """Orchestrates candidate retrieval and the three scorers."""

    def __init__(
        self,
        store: CandidateStore,
        config: Optional[RankingConfig] = None,
        matcher: Optional[OpportunityMatcher] = None
    ):
        self.store = store
        self.config = config or RankingConfig()
        self.ranker = HybridRanker(empty_text_score=self.config.search.empty_text_score)
        self.signals = CompositeSignalScorer(self.config.trending, self.config.health)
        self.matcher = matcher or OpportunityMatcher(
            self.config.matching.factor_weights.to_weight_configuration()
        )

    def _clamp_limit(self, limit: int) -> int:
        if limit is None or limit <= 0:
            raise InvalidLimit(f"Result limit must be positive, got {limit}")
        max_limit = self.config.search.max_result_limit
        if limit > max_limit:
            logger.debug(f"Clamping result limit {limit} to {max_limit}")
            return max_limit
        return limit

    def _prepare(self, query: QuerySpec) -> QuerySpec:
        query.validate()
        return replace(query, result_limit=self._clamp_limit(query.result_limit))

    def default_query(self, search_text: Optional[str] = None, query_embedding: Optional[List[float]] = None) -> QuerySpec:
        """Build a QuerySpec from the configured search defaults."""
        cfg = self.config.search
        return QuerySpec(
            search_text=search_text,
            query_embedding=query_embedding,
            weights=cfg.weight_pair(),
            similarity_threshold=cfg.similarity_threshold,
            result_limit=cfg.result_limit
        )

    # ------------------------------------------------------------------
    # Hybrid search
    # ------------------------------------------------------------------

    def search(self, query: QuerySpec) -> List[MatchResult]:
        """
        Hybrid search over open opportunities.

        Raises:
            InvalidWeightConfiguration, InvalidLimit, InvalidThreshold
        """
        query = self._prepare(query)
        candidates = self.store.fetch_candidates(QueryHint(
            kind=CandidateKind.OPPORTUNITY,
            status='open',
            search_text=query.search_text,
            query_embedding=query.query_embedding,
            limit=query.result_limit
        ))
        results = self.ranker.rank(candidates, query)
        logger.info(f"Opportunity search: {len(results)}/{len(candidates)} candidates above {query.similarity_threshold}")
        return results

    def search_repositories(self, query: QuerySpec) -> List[MatchResult]:
        """Hybrid search over active repositories, scaled by repository quality."""
        query = self._prepare(query)
        candidates = self.store.fetch_candidates(QueryHint(
            kind=CandidateKind.REPOSITORY,
            status='active',
            search_text=query.search_text,
            query_embedding=query.query_embedding,
            limit=query.result_limit
        ))
        results = self.ranker.rank_repositories(candidates, query)
        logger.info(f"Repository search: {len(results)}/{len(candidates)} candidates above {query.similarity_threshold}")
        return results

    def similar_users(
        self,
        query_embedding: Sequence[float],
        threshold: float = SIMILAR_USER_THRESHOLD,
        limit: int = SIMILAR_USER_LIMIT
    ) -> List[MatchResult]:
        """Users whose profile embedding is close to the query (vector-only)."""
        query = self._prepare(QuerySpec(
            query_embedding=list(query_embedding),
            weights=WeightPair(text_weight=0.0, vector_weight=1.0),
            similarity_threshold=threshold,
            result_limit=limit
        ))
        candidates = self.store.fetch_candidates(QueryHint(
            kind=CandidateKind.USER,
            status=None,
            query_embedding=query.query_embedding,
            limit=query.result_limit
        ))
        return self.ranker.rank(candidates, query)

    # ------------------------------------------------------------------
    # Personalized matching
    # ------------------------------------------------------------------

    def _match_settings(self, limit: Optional[int], threshold: Optional[float]) -> Tuple[int, float]:
        cfg = self.config.matching
        threshold = cfg.similarity_threshold if threshold is None else threshold
        limit = self._clamp_limit(cfg.result_limit if limit is None else limit)
        if not (0.0 <= threshold <= 1.0):
            raise InvalidThreshold(f"Match threshold must be within [0, 1], got {threshold}")
        return limit, threshold

    def match_profile(
        self,
        user: UserProfile,
        limit: Optional[int] = None,
        threshold: Optional[float] = None
    ) -> List[MatchScore]:
        """
        Personalized matching for a caller-supplied profile.

        Open opportunities in repositories the user already contributed to
        are skipped. Equal scores put good-first-issue opportunities first,
        then keep store order.
        """
        limit, threshold = self._match_settings(limit, threshold)

        contributed = set(user.contributed_repository_ids)
        opportunities = [
            o for o in self.store.fetch_candidates(QueryHint(kind=CandidateKind.OPPORTUNITY, status='open'))
            if o.repository_id is None or o.repository_id not in contributed
        ]

        scored = [self.matcher.score(user, o) for o in opportunities]
        kept = OpportunityMatcher.filter_by_minimum_score(scored, threshold)
        kept.sort(key=lambda m: (-m.total_score, not m.candidate.good_first_issue))

        logger.info(f"Matched user {user.id}: {len(kept)}/{len(opportunities)} opportunities above {threshold}")
        return OpportunityMatcher.top_n(kept, limit)

    def match_for_user(
        self,
        user_id: str,
        threshold: Optional[float] = None,
        limit: Optional[int] = None
    ) -> List[MatchScore]:
        """
        Personalized matches for a stored user.

        Raises:
            NotFoundError: the user does not exist
            InvalidLimit, InvalidThreshold: raised before the user is fetched
        """
        limit, threshold = self._match_settings(limit, threshold)
        user = self.store.fetch_user(user_id)
        return self.match_profile(user, limit=limit, threshold=threshold)

    # ------------------------------------------------------------------
    # Composite signals
    # ------------------------------------------------------------------

    def trending(
        self,
        window_hours: Optional[float] = None,
        min_engagement: Optional[int] = None,
        limit: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> List[MatchResult]:
        cfg = self.config.trending
        window_hours = cfg.window_hours if window_hours is None else window_hours
        min_engagement = cfg.min_engagement if min_engagement is None else min_engagement
        limit = self._clamp_limit(cfg.result_limit if limit is None else limit)
        CompositeSignalScorer.validate_trending_window(window_hours, min_engagement)
        now = now or utc_now()

        created_after = now - timedelta(hours=window_hours)
        candidates = self.store.fetch_candidates(QueryHint(
            kind=CandidateKind.OPPORTUNITY,
            status='open',
            created_after=created_after
        ))
        return self.signals.trending(
            candidates,
            window_hours=window_hours,
            min_engagement=min_engagement,
            limit=limit,
            now=now
        )

    def health(self, entity_id: str) -> HealthSnapshot:
        """
        Health snapshot of one repository.

        Raises:
            NotFoundError: the repository does not exist
        """
        repository = self.store.fetch_by_id(entity_id, CandidateKind.REPOSITORY)
        opportunities = self.store.fetch_opportunities_for_repository(repository.id)
        return self.signals.health(repository, opportunities)
