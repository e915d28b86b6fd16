#!/usr/bin/env python3
"""
Ranking Module - Hybrid text/vector ranking and composite signals.

Public API:
- HybridRanker: text + vector blend over candidates
- CompositeSignalScorer: trending and repository health composites

Modules:
- models.py: Value objects (Candidate, QuerySpec, WeightPair, MatchResult, ...)
- text_similarity.py: Trigram similarity and full-text matching
- similarity.py: Embedding similarity
- hybrid.py: HybridRanker
- signals.py: CompositeSignalScorer
"""
from core.ranking.models import (
    Candidate, CandidateKind, ContributionType, SkillLevel, UserProfile,
    QuerySpec, WeightPair, WeightConfiguration, DEFAULT_WEIGHT_CONFIGURATION,
    ScoreBreakdown, MatchResult, HealthSnapshot
)
from core.ranking.hybrid import HybridRanker
from core.ranking.signals import CompositeSignalScorer

__all__ = [
    'Candidate', 'CandidateKind', 'ContributionType', 'SkillLevel', 'UserProfile',
    'QuerySpec', 'WeightPair', 'WeightConfiguration', 'DEFAULT_WEIGHT_CONFIGURATION',
    'ScoreBreakdown', 'MatchResult', 'HealthSnapshot',
    'HybridRanker', 'CompositeSignalScorer',
]
