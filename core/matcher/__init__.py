"""Matcher Module - Personalized six-factor opportunity matching."""
from core.matcher.models import MatchScore
from core.matcher.opportunity_matcher import OpportunityMatcher
from core.matcher import factors, explainability

__all__ = ['OpportunityMatcher', 'MatchScore', 'factors', 'explainability']
