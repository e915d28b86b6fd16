#!/usr/bin/env python3
"""
Match Factors - The six independent sub-scores of a personalized match.

Every factor returns a value in [0, 1] and never raises. Missing or
under-specified data falls back to a documented default so one sparse
opportunity cannot abort a batch:

- skill_match: 0.5 when the opportunity lists no required skills
- language_match: 0.5 when either side has no languages/technologies
- interest_match: 0.5 when the user declared no interests
- availability_fit: 0.8 when estimated hours are unknown, 0.2 with no time
"""

from typing import Dict, List, Tuple

from core.ranking.models import Candidate, UserProfile, SkillLevel, clamp_unit

UNSPECIFIED_DEFAULT = 0.5
EXACT_SKILL_BONUS = 0.1

CATEGORY_INTEREST_BONUS = 0.3
DESCRIPTION_INTEREST_WEIGHT = 0.7
GENERAL_INTEREST = 'general'

# Signed tier distance (opportunity - user) -> score
DIFFICULTY_EXACT = 1.0
DIFFICULTY_ONE_HARDER = 0.8
DIFFICULTY_ONE_EASIER = 0.7
DIFFICULTY_MUCH_HARDER = 0.2
DIFFICULTY_MUCH_EASIER = 0.4

UNKNOWN_HOURS_SCORE = 0.8
NO_AVAILABILITY_SCORE = 0.2
# (minimum availability / estimate ratio, score), checked in order
AVAILABILITY_BANDS = (
    (2.0, 1.0),
    (1.5, 0.9),
    (1.0, 0.8),
    (0.7, 0.6),
    (0.5, 0.4),
)
AVAILABILITY_FLOOR = 0.2

NEWCOMER_MONTHS = 6
UNDER_EXPERIENCED_SCORE = 0.3
OVER_EXPERIENCED_SCORE = 0.4
# Experience months (min, ideal, max) appropriate to each difficulty tier
EXPERIENCE_RANGES: Dict[SkillLevel, Tuple[float, float, float]] = {
    SkillLevel.BEGINNER: (0, 3, 12),
    SkillLevel.INTERMEDIATE: (3, 12, 36),
    SkillLevel.ADVANCED: (12, 36, 72),
    SkillLevel.EXPERT: (24, 60, 120),
}


def _lowered(values: List[str]) -> List[str]:
    return [v.lower() for v in (values or []) if v]


def _overlaps(a: str, b: str) -> bool:
    return a == b or a in b or b in a


def skill_match(user: UserProfile, opportunity: Candidate) -> float:
    """
    Fraction of required skills the user covers, plus a bonus per exact match.

    Matching is case-insensitive substring in either direction, so
    'React' covers 'React Native' and vice versa.
    """
    required = _lowered(opportunity.required_skills)
    if not required:
        return UNSPECIFIED_DEFAULT

    user_skills = _lowered(user.preferred_languages)
    matched = [s for s in required if any(_overlaps(s, u) for u in user_skills)]
    exact = [s for s in required if s in user_skills]

    base = len(matched) / len(required)
    return clamp_unit(base + len(exact) * EXACT_SKILL_BONUS)


def language_match(user: UserProfile, opportunity: Candidate) -> float:
    """Fraction of the opportunity's technologies among the user's languages."""
    technologies = _lowered(opportunity.technologies)
    languages = _lowered(user.preferred_languages)
    if not technologies or not languages:
        return UNSPECIFIED_DEFAULT

    matched = [t for t in technologies if any(_overlaps(t, lang) for lang in languages)]
    return clamp_unit(len(matched) / len(technologies))


def interest_match(user: UserProfile, opportunity: Candidate) -> float:
    """Category bonus plus proportional credit for interests named in the description."""
    interests = _lowered(user.interests)
    if not interests:
        return UNSPECIFIED_DEFAULT

    score = 0.0
    category = opportunity.contribution_type.value
    if category in interests or GENERAL_INTEREST in interests:
        score += CATEGORY_INTEREST_BONUS

    description = (opportunity.description or '').lower()
    mentioned = [
        i for i in interests
        if i in description or i.replace('-', ' ').replace('_', ' ') in description
    ]
    score += (len(mentioned) / len(interests)) * DESCRIPTION_INTEREST_WEIGHT

    return clamp_unit(score)


def difficulty_fit(user: UserProfile, opportunity: Candidate) -> float:
    distance = user.skill_level.distance_to(opportunity.difficulty)
    if distance == 0:
        return DIFFICULTY_EXACT
    if distance == 1:
        return DIFFICULTY_ONE_HARDER
    if distance == -1:
        return DIFFICULTY_ONE_EASIER
    if distance > 1:
        return DIFFICULTY_MUCH_HARDER
    return DIFFICULTY_MUCH_EASIER


def availability_fit(user: UserProfile, opportunity: Candidate) -> float:
    if user.availability_hours <= 0:
        return NO_AVAILABILITY_SCORE
    if not opportunity.estimated_hours or opportunity.estimated_hours <= 0:
        return UNKNOWN_HOURS_SCORE

    ratio = user.availability_hours / opportunity.estimated_hours
    for floor, score in AVAILABILITY_BANDS:
        if ratio >= floor:
            return score
    return AVAILABILITY_FLOOR


def experience_fit(user: UserProfile, opportunity: Candidate) -> float:
    """
    How appropriate the user's experience is for the opportunity's tier.

    Inside the tier's range the score decays linearly from 1.0 at the ideal
    to 0.5 at the farther range edge.
    """
    months = user.experience_months
    if opportunity.good_first_issue and months < NEWCOMER_MONTHS:
        return 1.0

    low, ideal, high = EXPERIENCE_RANGES[opportunity.difficulty]
    if months < low:
        return UNDER_EXPERIENCED_SCORE
    if months > high:
        return OVER_EXPERIENCED_SCORE

    max_distance = max(ideal - low, high - ideal)
    return clamp_unit(1.0 - (abs(months - ideal) / max_distance) * 0.5)


def calculate_factors(user: UserProfile, opportunity: Candidate) -> Dict[str, float]:
    """All six factor scores keyed by factor name."""
    return {
        'skill_match': skill_match(user, opportunity),
        'language_match': language_match(user, opportunity),
        'interest_match': interest_match(user, opportunity),
        'difficulty': difficulty_fit(user, opportunity),
        'availability': availability_fit(user, opportunity),
        'experience': experience_fit(user, opportunity),
    }
