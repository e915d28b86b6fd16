#!/usr/bin/env python3
"""
Composite Signals - Trending and health scores.

Both follow the same shape: independent unit signals, a weighted blend and
a few qualitative tags that explain the result.

Trending:
- engagement: applications * application_weight + views * view_weight,
  squashed to [0, 1) with 1 - exp(-engagement / engagement_scale)
- recency: 1 - age / window, the linear decay over the caller's window
- quality: log10(stars) / 5, capped at 1

Health:
- health_score: weighted mean of activity, community, documentation and
  contributor-friendliness sub-scores
- counters: total/open opportunities and mean completion hours
"""

import math
import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from core.config_loader import TrendingConfig, HealthConfig
from core.utils import as_utc, utc_now
from core.exceptions import InvalidLimit, ConfigurationError, InvalidWeightConfiguration
from core.ranking.models import Candidate, MatchResult, HealthSnapshot, ScoreBreakdown, clamp_unit

logger = logging.getLogger(__name__)

HEALTH_STATUS_BANDS = (
    (0.8, 'excellent'),
    (0.6, 'good'),
    (0.4, 'fair'),
)
HEALTH_STATUS_FLOOR = 'needs_improvement'

# (sub-score attribute, strength tag, weakness tag)
HEALTH_TAGS = (
    ('activity_score', 'active_development', 'increase_activity'),
    ('community_score', 'strong_community', 'build_community'),
    ('documentation_score', 'well_documented', 'improve_docs'),
    ('contributor_friendliness', 'contributor_friendly', 'better_onboarding'),
)


class CompositeSignalScorer:
    """Trending and health composites. Stateless apart from its configuration."""

    def __init__(
        self,
        trending_config: Optional[TrendingConfig] = None,
        health_config: Optional[HealthConfig] = None
    ):
        self.trending_config = trending_config or TrendingConfig()
        self.health_config = health_config or HealthConfig()

        blend = (
            self.trending_config.engagement_blend
            + self.trending_config.recency_blend
            + self.trending_config.quality_blend
        )
        if abs(blend - 1.0) > 1e-6:
            raise InvalidWeightConfiguration(f"Trending blend weights must sum to 1.0, got {blend:.6f}")

    # ------------------------------------------------------------------
    # Trending
    # ------------------------------------------------------------------

    def engagement(self, candidate: Candidate) -> float:
        cfg = self.trending_config
        return (
            max(candidate.application_count or 0, 0) * cfg.application_weight
            + max(candidate.view_count or 0, 0) * cfg.view_weight
        )

    def engagement_score(self, candidate: Candidate) -> float:
        scale = self.trending_config.engagement_scale
        if scale <= 0:
            return 1.0 if self.engagement(candidate) > 0 else 0.0
        return clamp_unit(1.0 - math.exp(-self.engagement(candidate) / scale))

    @staticmethod
    def recency_score(created_at: datetime, now: datetime, window_hours: float) -> float:
        age_hours = (as_utc(now) - as_utc(created_at)).total_seconds() / 3600.0
        return clamp_unit(1.0 - age_hours / window_hours)

    @staticmethod
    def quality_score(stars_count: int) -> float:
        return clamp_unit(math.log10(max(stars_count or 0, 1)) / 5.0)

    def in_window(self, candidate: Candidate, now: datetime, window_hours: float) -> bool:
        if candidate.created_at is None:
            return False
        age_hours = (as_utc(now) - as_utc(candidate.created_at)).total_seconds() / 3600.0
        return 0.0 <= age_hours <= window_hours

    def trending_score(self, candidate: Candidate, now: datetime, window_hours: float) -> ScoreBreakdown:
        cfg = self.trending_config
        components = {
            'engagement': self.engagement_score(candidate),
            'recency': self.recency_score(candidate.created_at, now, window_hours),
            'quality': self.quality_score(candidate.stars_count),
        }
        weights = {
            'engagement': cfg.engagement_blend,
            'recency': cfg.recency_blend,
            'quality': cfg.quality_blend,
        }
        total = sum(components[name] * weights[name] for name in components)
        return ScoreBreakdown(components=components, weights=weights, total_score=clamp_unit(total))

    @staticmethod
    def validate_trending_window(window_hours: float, min_engagement: int) -> None:
        if window_hours <= 0:
            raise ConfigurationError(f"Time window must be positive, got {window_hours}")
        if min_engagement < 0:
            raise ConfigurationError(f"Minimum engagement must be >= 0, got {min_engagement}")

    def trending(
        self,
        candidates: Sequence[Candidate],
        window_hours: Optional[float] = None,
        min_engagement: Optional[int] = None,
        limit: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> List[MatchResult]:
        """
        Rank recently created candidates by decayed engagement.

        Candidates created outside the window are excluded before scoring,
        then those whose raw views + applications fall below min_engagement.
        """
        cfg = self.trending_config
        window_hours = cfg.window_hours if window_hours is None else window_hours
        min_engagement = cfg.min_engagement if min_engagement is None else min_engagement
        limit = cfg.result_limit if limit is None else limit
        now = now or utc_now()

        self.validate_trending_window(window_hours, min_engagement)
        if limit <= 0:
            raise InvalidLimit(f"Result limit must be positive, got {limit}")

        scored: List[Tuple[MatchResult, float]] = []
        for candidate in candidates:
            if not self.in_window(candidate, now, window_hours):
                continue
            raw_engagement = (candidate.view_count or 0) + (candidate.application_count or 0)
            if raw_engagement < min_engagement:
                continue

            breakdown = self.trending_score(candidate, now, window_hours)
            reasons = []
            if candidate.application_count:
                reasons.append(f"{candidate.application_count} contributor(s) applied recently")
            if breakdown.get('recency') >= 0.9:
                reasons.append('Newly posted')

            result = MatchResult(
                candidate_id=candidate.id,
                breakdown=breakdown,
                match_reasons=reasons,
                candidate=candidate
            )
            scored.append((result, as_utc(candidate.created_at).timestamp()))

        # Newest first on equal scores; sorted() keeps corpus order beyond that
        scored.sort(key=lambda item: (-item[0].total_score, -item[1]))
        logger.debug(f"Trending: {len(scored)} candidates within {window_hours}h window")

        return [result for result, _ in scored[:limit]]

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def health_score(self, repository: Candidate) -> float:
        cfg = self.health_config
        weights = (
            (repository.activity_score, cfg.activity_weight),
            (repository.community_score, cfg.community_weight),
            (repository.documentation_score, cfg.documentation_weight),
            (repository.contributor_friendliness, cfg.contributor_friendliness_weight),
        )
        weight_total = sum(w for _, w in weights)
        if weight_total <= 0:
            return 0.0
        return clamp_unit(sum(clamp_unit(score) * w for score, w in weights) / weight_total)

    @staticmethod
    def health_status(score: float) -> str:
        for floor, label in HEALTH_STATUS_BANDS:
            if score >= floor:
                return label
        return HEALTH_STATUS_FLOOR

    @staticmethod
    def average_completion_hours(opportunities: Sequence[Candidate]) -> Optional[float]:
        """Mean hours from start to completion over opportunities with both timestamps."""
        durations = [
            (as_utc(o.completed_at) - as_utc(o.started_at)).total_seconds() / 3600.0
            for o in opportunities
            if o.started_at is not None and o.completed_at is not None
        ]
        if not durations:
            return None
        return sum(durations) / len(durations)

    def health(self, repository: Candidate, opportunities: Sequence[Candidate]) -> HealthSnapshot:
        """Aggregate repository health from its sub-scores and opportunities."""
        cfg = self.health_config
        score = self.health_score(repository)

        strengths = []
        weaknesses = []
        for attribute, strength_tag, weakness_tag in HEALTH_TAGS:
            value = clamp_unit(getattr(repository, attribute))
            if value >= cfg.strength_threshold:
                strengths.append(strength_tag)
            elif value < cfg.weakness_threshold:
                weaknesses.append(weakness_tag)

        return HealthSnapshot(
            entity_id=repository.id,
            health_score=score,
            activity_score=clamp_unit(repository.activity_score),
            community_score=clamp_unit(repository.community_score),
            documentation_score=clamp_unit(repository.documentation_score),
            contributor_friendliness=clamp_unit(repository.contributor_friendliness),
            total_opportunities=len(opportunities),
            open_opportunities=sum(1 for o in opportunities if o.status == 'open'),
            avg_completion_hours=self.average_completion_hours(opportunities),
            health_status=self.health_status(score),
            key_strengths=strengths,
            key_weaknesses=weaknesses
        )
