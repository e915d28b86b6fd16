#!/usr/bin/env python3
"""
Matcher Models - Data structures for personalized matching.
"""

from dataclasses import dataclass

from core.ranking.models import MatchResult


@dataclass
class MatchScore(MatchResult):
    """MatchResult for one user/opportunity pair with named factor accessors."""

    @property
    def opportunity_id(self) -> str:
        return self.candidate_id

    @property
    def skill_match_score(self) -> float:
        return self.breakdown.get('skill_match')

    @property
    def language_match_score(self) -> float:
        return self.breakdown.get('language_match')

    @property
    def interest_match_score(self) -> float:
        return self.breakdown.get('interest_match')

    @property
    def difficulty_score(self) -> float:
        return self.breakdown.get('difficulty')

    @property
    def availability_score(self) -> float:
        return self.breakdown.get('availability')

    @property
    def experience_score(self) -> float:
        return self.breakdown.get('experience')
