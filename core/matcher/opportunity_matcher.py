#!/usr/bin/env python3
"""
Opportunity Matcher - Score an opportunity against a user profile.

Computes six independent factor scores (skill, language, interest,
difficulty, availability, experience) and a weighted total using an
injected WeightConfiguration, then attaches reasons and warnings.
"""
from typing import List, Optional, Sequence

from core.ranking.models import (
    Candidate, UserProfile, WeightConfiguration, DEFAULT_WEIGHT_CONFIGURATION, combine_scores
)
from core.matcher.models import MatchScore
from core.matcher.factors import calculate_factors
from core.matcher.explainability import generate_match_reasons, generate_warnings

DEFAULT_MIN_SCORE = 0.3
DEFAULT_TOP_N = 10


class OpportunityMatcher:
    """Six-factor personalized scorer. Pure; safe to share between requests."""

    def __init__(self, weights: Optional[WeightConfiguration] = None):
        """
        Initialize with factor weights.

        Args:
            weights: WeightConfiguration; the canonical configuration when omitted
        """
        self.weights = weights or DEFAULT_WEIGHT_CONFIGURATION

    def score(self, user: UserProfile, opportunity: Candidate) -> MatchScore:
        """
        Score one opportunity for one user.

        Never raises for missing opportunity data; every factor has a default.
        """
        factors = calculate_factors(user, opportunity)
        breakdown = combine_scores(factors, self.weights.as_dict())

        return MatchScore(
            candidate_id=opportunity.id,
            breakdown=breakdown,
            match_reasons=generate_match_reasons(user, opportunity, breakdown.components),
            warnings=generate_warnings(user, opportunity, breakdown.components),
            candidate=opportunity
        )

    def rank_opportunities(self, user: UserProfile, opportunities: Sequence[Candidate]) -> List[MatchScore]:
        """Score every opportunity; sorted by total score, ties in input order."""
        scores = [self.score(user, opp) for opp in opportunities]
        return sorted(scores, key=lambda s: s.total_score, reverse=True)

    @staticmethod
    def filter_by_minimum_score(matches: Sequence[MatchScore], min_score: float = DEFAULT_MIN_SCORE) -> List[MatchScore]:
        return [m for m in matches if m.total_score >= min_score]

    @staticmethod
    def top_n(matches: Sequence[MatchScore], n: int = DEFAULT_TOP_N) -> List[MatchScore]:
        if n <= 0:
            return []
        return list(matches[:n])
