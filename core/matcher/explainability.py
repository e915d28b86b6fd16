#!/usr/bin/env python3
"""
Explainability Module - Human-readable reasons and warnings for a match.

Rules are evaluated in a fixed order so the same inputs always produce the
same lists. Reasons fire when a factor crosses a "strong" threshold or an
opportunity flag applies; warnings fire when a factor crosses a "weak"
threshold.
"""

from typing import Dict, List

from core.ranking.models import Candidate, UserProfile, SkillLevel

STRONG_SKILL = 0.7
STRONG_LANGUAGE = 0.7
STRONG_DIFFICULTY = 0.8
STRONG_AVAILABILITY = 0.8
HIGH_PRIORITY_MAX = 2  # Priority 1 is the most urgent

WEAK_SKILL = 0.3
WEAK_LANGUAGE = 0.3
WEAK_DIFFICULTY = 0.3
WEAK_AVAILABILITY = 0.5

MSG_TOO_HARD = 'This task may be more challenging than your current skill level'
MSG_TOO_EASY = 'This task may be too simple for your experience level'


def generate_match_reasons(
    user: UserProfile,
    opportunity: Candidate,
    factors: Dict[str, float]
) -> List[str]:
    reasons = []

    if factors['skill_match'] > STRONG_SKILL:
        reasons.append('Strong skill match')

    if factors['language_match'] > STRONG_LANGUAGE:
        reasons.append('Uses your preferred technologies')

    if factors['difficulty'] > STRONG_DIFFICULTY:
        reasons.append('Perfect difficulty level for your experience')

    if opportunity.good_first_issue and user.skill_level == SkillLevel.BEGINNER:
        reasons.append('Great first issue for beginners')

    if opportunity.mentorship_available:
        reasons.append('Mentorship available')

    if opportunity.help_wanted:
        reasons.append('Project actively seeking help')

    if factors['availability'] > STRONG_AVAILABILITY:
        reasons.append('Fits well within your available time')

    if opportunity.priority <= HIGH_PRIORITY_MAX:
        reasons.append('High priority contribution')

    return reasons


def generate_warnings(
    user: UserProfile,
    opportunity: Candidate,
    factors: Dict[str, float]
) -> List[str]:
    warnings = []

    if factors['skill_match'] < WEAK_SKILL:
        warnings.append('Limited skill match - consider if this aligns with your learning goals')

    if factors['difficulty'] < WEAK_DIFFICULTY:
        distance = user.skill_level.distance_to(opportunity.difficulty)
        if distance > 1:
            warnings.append(MSG_TOO_HARD)
        elif distance < -1:
            # Only reachable with a custom difficulty curve; the default scores much easier at 0.4
            warnings.append(MSG_TOO_EASY)

    if factors['availability'] < WEAK_AVAILABILITY and opportunity.estimated_hours:
        hours = float(opportunity.estimated_hours)
        warnings.append(f"Time commitment ({hours:g}h) may exceed your availability")

    if factors['language_match'] < WEAK_LANGUAGE:
        warnings.append('Uses technologies you may not be familiar with')

    return warnings
